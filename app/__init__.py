# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the blog backend bootstrap:
# - main.py: Application class, middleware order, error handlers, server
# - config.py: Environment variable loading and settings
# - middleware/: CORS, static files and cookie parsing
# - routers/: Health endpoints and the /api router
#
# The app layer is thin - blog endpoints live behind the /api router.
# =============================================================================
