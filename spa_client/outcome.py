"""
Result of a single HTTP exchange with the provider.
Resolved carries the parsed JSON body; Rejected carries the raw non-2xx response
so callers can read status, headers and body themselves.
"""
from dataclasses import dataclass
from typing import Any

import httpx


class ResponseRejected(Exception):
    """Raised by Rejected.unwrap(); keeps the provider's raw response."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"HTTP {response.status_code} from {response.request.url}")
        self.response = response


@dataclass(frozen=True)
class Resolved:
    value: dict[str, Any]

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> dict[str, Any]:
        return self.value


@dataclass(frozen=True)
class Rejected:
    response: httpx.Response

    @property
    def ok(self) -> bool:
        return False

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def unwrap(self) -> dict[str, Any]:
        raise ResponseRejected(self.response)


Outcome = Resolved | Rejected
