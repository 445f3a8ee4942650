"""
OpenID Connect helper for the SPA: discovery, authorization request, code-for-token exchange.
Stateless; the host calls the three operations in order and owns everything else.
"""
import logging
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from spa_client.browser import Browser
from spa_client.outcome import Outcome, Rejected, Resolved

logger = logging.getLogger(__name__)

WELL_KNOWN_PATH = "/.well-known/openid-configuration"
CALLBACK_PATH = "/spa.html"

# Characters encodeURIComponent leaves alone besides A-Z a-z 0-9 - _ . ~
_UNRESERVED_MARKS = "!*'()"


def _encode(params: dict[str, str]) -> str:
    """Percent-encode each value on its own (space -> %20, '/' -> %2F)."""
    return urlencode(params, safe=_UNRESERVED_MARKS, quote_via=quote)


def redirect_uri(browser: Browser) -> str:
    return browser.current_origin() + CALLBACK_PATH


def _outcome(response: httpx.Response) -> Outcome:
    if not response.is_success:
        return Rejected(response)
    return Resolved(response.json())


async def _send(request: httpx.Request, client: httpx.AsyncClient | None) -> httpx.Response:
    if client is not None:
        return await client.send(request)
    async with httpx.AsyncClient(timeout=None) as own_client:
        return await own_client.send(request)


async def get_configuration(issuer: str, *, client: httpx.AsyncClient | None = None) -> Outcome:
    """
    GET {issuer}/.well-known/openid-configuration.
    Resolved(document) on 2xx, Rejected(response) otherwise. Never cached.
    """
    request = httpx.Request("GET", issuer + WELL_KNOWN_PATH)
    response = await _send(request, client)
    return _outcome(response)


def build_authentication_request(
    configuration: dict[str, Any],
    client_id: str,
    scope: str,
    redirect_to: str,
) -> str:
    """Authorization endpoint URL for response_type=code."""
    params = {
        "response_type": "code",
        "scope": scope,
        "client_id": client_id,
        "redirect_uri": redirect_to,
    }
    return f"{configuration['authorization_endpoint']}?{_encode(params)}"


def send_authentication_request(
    configuration: dict[str, Any],
    client_id: str,
    scope: str,
    browser: Browser,
) -> None:
    """Navigate the browser to the authorization endpoint. Does not stop the caller."""
    url = build_authentication_request(configuration, client_id, scope, redirect_uri(browser))
    browser.navigate(url)


def _redact(body: str, client_secret: str) -> str:
    if not client_secret:
        return body
    return body.replace(_encode({"client_secret": client_secret}), "client_secret=***")


async def invoke_token_request(
    configuration: dict[str, Any],
    client_id: str,
    client_secret: str,
    code: str,
    browser: Browser,
    *,
    client: httpx.AsyncClient | None = None,
) -> Outcome:
    """
    POST the authorization code to the token endpoint (form-encoded).
    Resolved(token_response) on 2xx, passed through as returned; Rejected(response) otherwise.
    Transport and JSON errors propagate.
    """
    body = _encode(
        {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": redirect_uri(browser),
        }
    )
    logger.debug("invoke_token_request body %s", _redact(body, client_secret))
    request = httpx.Request(
        "POST",
        configuration["token_endpoint"],
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        content=body,
    )
    try:
        response = await _send(request, client)
        logger.info("invoke_token_request http status %s", response.status_code)
        outcome = _outcome(response)
    except Exception as e:
        logger.error("invoke_token_request error %s", e)
        raise
    if isinstance(outcome, Rejected):
        logger.error("invoke_token_request rejected with HTTP %s", outcome.status_code)
    else:
        # Field names only; token values are never logged
        fields = sorted(outcome.value) if isinstance(outcome.value, dict) else type(outcome.value).__name__
        logger.info("invoke_token_request token response fields %s", fields)
    return outcome
