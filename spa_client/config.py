"""
SPA client configuration. Lab defaults; override via environment.
The client secret is sent from the browser-facing client and is not a real secret.
"""
import os

# OpenID Provider (issuer); discovery document lives under {ISSUER}/.well-known/
ISSUER = os.environ.get("OAUTH_ISSUER", "http://127.0.0.1:9000").rstrip("/")

# Client registered at the provider
CLIENT_ID = os.environ.get("OAUTH_CLIENT_ID", "spa")
CLIENT_SECRET = os.environ.get("OAUTH_CLIENT_SECRET", "secret")

# Scopes requested at login (space-delimited)
SCOPE = os.environ.get("OAUTH_SCOPE", "openid profile")

# Where uvicorn listens when run as a script
HOST = os.environ.get("SPA_HOST", "127.0.0.1")
PORT = int(os.environ.get("SPA_PORT", "8000"))
LOG_LEVEL = os.environ.get("SPA_LOG_LEVEL", "info")
