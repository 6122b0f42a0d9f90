# =============================================================================
# app/middleware/static.py - Static File Serving
# =============================================================================
# Serves files (uploaded images, etc.) from the static root at the site root.
#
# Unlike mounting StaticFiles, a miss is not an error: the request continues
# to the application, so "/" and "/api/..." still reach their routes and
# unknown paths reach the not-found handler.
# =============================================================================

import logging
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class StaticFilesMiddleware:
    """
    Serve GET/HEAD requests that name an existing file under `directory`.

    Paths with a segment starting with "." (.env, .git/...) are never
    served.
    """

    def __init__(self, app: ASGIApp, directory: Path):
        self.app = app
        self.directory = Path(directory)
        self.files = StaticFiles(directory=self.directory, check_dir=False)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            await self.app(scope, receive, send)
            return

        if self._is_hidden(scope["path"]):
            await self.app(scope, receive, send)
            return

        try:
            response = await self.files.get_response(self.files.get_path(scope), scope)
        except HTTPException:
            await self.app(scope, receive, send)
            return

        logger.debug(f"Serving static file {scope['path']}")
        await response(scope, receive, send)

    @staticmethod
    def _is_hidden(path: str) -> bool:
        return any(part.startswith(".") for part in path.split("/") if part)
