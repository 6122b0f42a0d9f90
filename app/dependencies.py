# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Usage:
#   @router.get("/posts")
#   async def list_posts(db: DatabaseDep):
#       return await db["posts"].find().to_list(20)
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from app.context import AppContext


def get_context(request: Request) -> AppContext:
    """Return the context of the application serving this request."""
    return request.app.state.context


def get_database(context: Annotated[AppContext, Depends(get_context)]) -> AsyncDatabase:
    """
    Get the MongoDB database.

    Raises DatabaseUnavailableError (503) while the connection is pending
    or after it failed.
    """
    return context.database.database


# Type aliases for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
DatabaseDep = Annotated[AsyncDatabase, Depends(get_database)]
