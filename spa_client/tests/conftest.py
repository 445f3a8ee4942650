"""
Shared fixtures: a fake OpenID Provider behind httpx.MockTransport and a recording browser.
"""
import json

import httpx
import pytest

IDP = "https://idp.example"
ORIGIN = "https://spa.example"


class FakeProvider:
    """Answers discovery and token requests; records every request it sees."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.discovery_status = 200
        self.discovery = {
            "issuer": IDP,
            "authorization_endpoint": f"{IDP}/auth",
            "token_endpoint": f"{IDP}/token",
        }
        self.token_status = 200
        self.token_body: dict = {"access_token": "t1", "token_type": "Bearer", "expires_in": 3600}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/.well-known/openid-configuration":
            if self.discovery_status != 200:
                return httpx.Response(self.discovery_status, text="not here")
            return httpx.Response(200, json=self.discovery)
        if request.url.path == "/token":
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status, json={"error": "invalid_grant", "error_description": "Bad code"}
                )
            return httpx.Response(200, content=json.dumps(self.token_body).encode("utf-8"))
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingBrowser:
    def __init__(self, origin: str = ORIGIN):
        self.origin = origin
        self.visited: list[str] = []

    def current_origin(self) -> str:
        return self.origin

    def navigate(self, url: str) -> None:
        self.visited.append(url)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def browser():
    return RecordingBrowser()
