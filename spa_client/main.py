"""
SPA host app. Serves the entry page /spa.html and drives the OIDC helper:
GET /login -> discovery + redirect to the provider; GET /spa.html?code=... -> token exchange.
"""
import html
import logging
from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from spa_client.browser import RedirectingBrowser
from spa_client.config import CLIENT_ID, CLIENT_SECRET, HOST, ISSUER, LOG_LEVEL, PORT, SCOPE
from spa_client.oidc import CALLBACK_PATH, get_configuration, invoke_token_request, send_authentication_request
from spa_client.outcome import Rejected

logger = logging.getLogger(__name__)

app = FastAPI(title="SPA Client", version="0.1.0")


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound client for provider calls. No timeout."""
    async with httpx.AsyncClient(timeout=None) as client:
        yield client


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{html.escape(title)}</title></head>
<body>
  <h1>{html.escape(title)}</h1>
  {body}
  <p><a href="{CALLBACK_PATH}">Home</a></p>
</body>
</html>""",
        status_code=status_code,
    )


def _upstream_error(title: str, outcome: Rejected) -> HTMLResponse:
    detail = outcome.response.text[:500] if outcome.response.text else "(no body)"
    return _page(
        title,
        f"<p>Provider answered HTTP {outcome.status_code}.</p>\n  <pre>{html.escape(detail)}</pre>",
        status_code=502,
    )


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "spa_client"}


@app.get("/")
def index():
    """Entry point; the SPA lives at /spa.html."""
    return RedirectResponse(url=CALLBACK_PATH, status_code=302)


@app.get("/login")
async def login(request: Request, client: httpx.AsyncClient = Depends(get_http_client)):
    """Fetch the discovery document and send the browser to the authorization endpoint."""
    browser = RedirectingBrowser(request)
    try:
        outcome = await get_configuration(ISSUER, client=client)
        if isinstance(outcome, Rejected):
            logger.warning("Discovery rejected: HTTP %s", outcome.status_code)
            return _upstream_error("Discovery failed", outcome)
        send_authentication_request(outcome.value, CLIENT_ID, SCOPE, browser)
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.warning("Discovery failed: %r", e)
        return _page("Discovery failed", f"<p>{html.escape(repr(e))}</p>", status_code=502)
    return browser.redirect()


@app.get(CALLBACK_PATH, response_class=HTMLResponse)
async def spa(
    request: Request,
    code: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Entry page and redirect target. Without a code, offers login.
    With ?code=..., exchanges it for tokens and shows what came back (never the token values).
    """
    if error:
        return _page("Login error", f"<p>{html.escape(error_description or error)}</p>", status_code=400)

    if not code:
        return _page("OpenID Connect SPA", '<p><a href="/login">Log in</a></p>')

    try:
        discovery = await get_configuration(ISSUER, client=client)
        if isinstance(discovery, Rejected):
            logger.warning("Discovery rejected: HTTP %s", discovery.status_code)
            return _upstream_error("Discovery failed", discovery)
        outcome = await invoke_token_request(
            discovery.value, CLIENT_ID, CLIENT_SECRET, code, RedirectingBrowser(request), client=client
        )
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.warning("Token exchange failed: %r", e)
        return _page("Token exchange failed", f"<p>{html.escape(repr(e))}</p>", status_code=502)

    if isinstance(outcome, Rejected):
        return _upstream_error("Token exchange failed", outcome)

    tokens = outcome.value if isinstance(outcome.value, dict) else {}
    fields = ", ".join(sorted(tokens))
    scope = str(tokens.get("scope", ""))
    expires_in = tokens.get("expires_in", "")
    has_id = "Yes" if tokens.get("id_token") else "No"
    return _page(
        "Login success",
        f"""<p>Token response fields: <code>{html.escape(fields)}</code></p>
  <p>Scope: <code>{html.escape(scope)}</code></p>
  <p>Expires in: {html.escape(str(expires_in))}</p>
  <p>ID token received: {has_id}</p>""",
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "spa_client.main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL,
        reload=True,
    )
