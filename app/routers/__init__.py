# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# - health.py: Root, liveness and readiness endpoints
# - api.py: The router mounted at /api, plus the loader used to swap it
#
# Each router is mounted by the Application bootstrap in app/main.py.
# =============================================================================

from . import api
from . import health

__all__ = [
    "api",
    "health",
]
