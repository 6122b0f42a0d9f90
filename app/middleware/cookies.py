# =============================================================================
# app/middleware/cookies.py - Cookie Parsing
# =============================================================================
# Parses the Cookie header once per request and exposes:
#
#   request.state.cookies         plain cookies
#   request.state.signed_cookies  signed cookies that passed verification
#
# Cookie value formats:
#   s:<value>.<signature>  signed with COOKIE_PARSER_SECRET_KEY
#   j:<json>               JSON-encoded value
#
# A signed cookie with a bad signature shows up in signed_cookies as False,
# so handlers can tell "tampered" from "missing".
#
# Signatures are itsdangerous HMAC-SHA256 with the "cookie" salt. Cookies
# signed by other libraries (Node's cookie-signature, for one) read as False
# and have to be issued again.
#
# Usage (setting a signed cookie from a route):
#   response.set_cookie("session", sign_cookie(session_id, secret), httponly=True)
# =============================================================================

import hashlib
import json
import logging
from typing import Any

from itsdangerous import BadSignature, Signer
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

SIGNED_PREFIX = "s:"
JSON_PREFIX = "j:"


def _signer(secret: str) -> Signer:
    return Signer(secret, salt="cookie", digest_method=hashlib.sha256)


def sign_cookie(value: str, secret: str) -> str:
    """Sign a cookie value, returning 's:<value>.<signature>'."""
    return SIGNED_PREFIX + _signer(secret).sign(value).decode("utf-8")


def unsign_cookie(value: str, secret: str) -> str | None:
    """
    Verify a signed cookie value.

    Accepts the value with or without the 's:' prefix. Returns the
    original value, or None if the signature doesn't match.
    """
    if value.startswith(SIGNED_PREFIX):
        value = value[len(SIGNED_PREFIX):]
    try:
        return _signer(secret).unsign(value).decode("utf-8")
    except BadSignature:
        return None


def _decode_json_cookie(value: str) -> Any:
    if not value.startswith(JSON_PREFIX):
        return value
    try:
        return json.loads(value[len(JSON_PREFIX):])
    except json.JSONDecodeError:
        return value


def parse_cookies(
    raw_cookies: dict[str, str],
    secret: str | None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """
    Split cookies into (cookies, signed_cookies).

    Without a secret, signed cookies stay in `cookies` untouched.
    """
    cookies: dict[str, Any] = {}
    signed: dict[str, Any] = {}

    for name, value in raw_cookies.items():
        if secret and value.startswith(SIGNED_PREFIX):
            unsigned = unsign_cookie(value, secret)
            if unsigned is None:
                logger.warning(f"Rejected cookie with invalid signature: {name}")
                signed[name] = False
            else:
                signed[name] = _decode_json_cookie(unsigned)
        else:
            cookies[name] = _decode_json_cookie(value)

    return cookies, signed


class CookieParserMiddleware:
    """Populate request.state.cookies and request.state.signed_cookies."""

    def __init__(self, app: ASGIApp, secret: str | None = None):
        self.app = app
        self.secret = secret
        if not secret:
            logger.warning("COOKIE_PARSER_SECRET_KEY is not set; signed cookies won't be verified")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            connection = HTTPConnection(scope)
            cookies, signed = parse_cookies(connection.cookies, self.secret)
            state = scope.setdefault("state", {})
            state["cookies"] = cookies
            state["signed_cookies"] = signed

        await self.app(scope, receive, send)
