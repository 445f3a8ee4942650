"""
Browser capability used by the OIDC helper: where the page lives and how to leave it.
RedirectingBrowser backs it with an incoming FastAPI request; navigate() becomes a 302.
"""
from typing import Protocol

from fastapi import Request
from fastapi.responses import RedirectResponse


class Browser(Protocol):
    def current_origin(self) -> str:
        """Scheme, host and port of the current page, without a trailing slash."""
        ...

    def navigate(self, url: str) -> None:
        """Same-tab, full-page navigation to url."""
        ...


class RedirectingBrowser:
    """Browser seen from the server side of a single request."""

    def __init__(self, request: Request):
        self._request = request
        self.location: str | None = None

    def current_origin(self) -> str:
        """Scheme and host of the request only; any mount prefix (root_path) is dropped."""
        url = self._request.url
        return f"{url.scheme}://{url.netloc}"

    def navigate(self, url: str) -> None:
        self.location = url

    def redirect(self) -> RedirectResponse:
        if self.location is None:
            raise RuntimeError("navigate() was not called")
        return RedirectResponse(url=self.location, status_code=302)
