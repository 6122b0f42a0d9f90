# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
#
# /api/health never looks at the database: the HTTP layer reports healthy
# as soon as it serves requests. /api/health/ready reports the MongoDB
# connection state separately.
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from app.dependencies import ContextDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class DatabaseCheck(BaseModel):
    """MongoDB connection state."""
    status: str
    error: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: DatabaseCheck


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_class=PlainTextResponse)
async def root():
    """Confirm the backend is up."""
    return "✅ Backend is running!"


@router.get("/api/health", response_class=PlainTextResponse)
async def health_check():
    """Liveness check for load balancers."""
    return PlainTextResponse("✅ OK", status_code=200)


@router.get("/api/health/ready", response_model=ReadinessResponse)
async def readiness_check(context: ContextDep):
    """
    Readiness check endpoint.

    Returns 200 once MongoDB is connected, 503 while the connection is
    pending or after it failed.
    """
    database = context.database
    body = ReadinessResponse(
        status="ready" if database.is_ready else "degraded",
        database=DatabaseCheck(**database.describe()),
    )
    return JSONResponse(
        status_code=200 if database.is_ready else 503,
        content=body.model_dump(exclude_none=True),
    )
