# =============================================================================
# app/middleware/cors.py - Cross-Origin Policy
# =============================================================================
# Browsers may call the API from the configured origins only, with cookies.
# Requests from any other origin get no Access-Control-Allow-Origin header,
# and their preflight requests are rejected with 400.
# =============================================================================

from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware import Middleware

from app.config import Settings

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]


def cors_middleware(settings: Settings) -> Middleware:
    """Build the CORS middleware for the configured origin allow-list."""
    return Middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )
