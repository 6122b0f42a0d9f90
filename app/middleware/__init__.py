# =============================================================================
# app/middleware/ - Request Middleware
# =============================================================================
# ASGI middleware installed by the Application bootstrap, outermost first:
# - cors.py: Cross-origin policy (origin allow-list, credentials)
# - errors.py: Unhandled exceptions converted to the JSON error envelope
# - static.py: Static files served from the site root, falling through on miss
# - cookies.py: Cookie parsing with signed-cookie verification
# =============================================================================

from app.middleware.cookies import CookieParserMiddleware, sign_cookie, unsign_cookie
from app.middleware.cors import cors_middleware
from app.middleware.errors import ErrorEnvelopeMiddleware
from app.middleware.static import StaticFilesMiddleware

__all__ = [
    "CookieParserMiddleware",
    "ErrorEnvelopeMiddleware",
    "StaticFilesMiddleware",
    "cors_middleware",
    "sign_cookie",
    "unsign_cookie",
]
