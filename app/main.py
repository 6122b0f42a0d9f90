# =============================================================================
# app/main.py - Application Bootstrap
# =============================================================================
# Composition root of the blog backend. The Application class wires, in order:
#
#   1. configuration (app/config.py)
#   2. the MongoDB connection, started in the background at startup
#   3. CORS, body parsing and static files
#   4. cookie parsing
#   5. the root/health endpoints and the /api router
#   6. the not-found stage and the error-to-JSON handler
#   7. the uvicorn server listening on PORT
#
# Usage:
#   blog-backend
#   uvicorn app.main:create_app --factory --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Callable

import uvicorn
from fastapi import APIRouter, Depends, FastAPI
from starlette.middleware import Middleware
from starlette.types import Receive, Scope, Send

from app.body import parse_body
from app.config import Settings, get_settings
from app.context import AppContext
from app.exceptions import NotFoundError, register_exception_handlers
from app.middleware import (
    CookieParserMiddleware,
    ErrorEnvelopeMiddleware,
    StaticFilesMiddleware,
    cors_middleware,
)
from app.routers import health
from app.routers.api import load_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class ListeningServer(uvicorn.Server):
    """uvicorn server that reports the port once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"Backend listening on port {self.config.port}")


class Application:
    """
    Blog backend application.

    Construction performs the whole setup synchronously; nothing is rolled
    back if a later step fails. The MongoDB connection is only scheduled
    here and runs once the event loop starts, without blocking startup.
    """

    def __init__(self, settings: Settings | None = None, api_router: APIRouter | None = None):
        self.settings = settings or get_settings()
        configure_logging(self.settings)

        self.context = AppContext.from_settings(self.settings)
        self.host = self.settings.HOST
        self.port = self.settings.PORT
        self.db_uri = self.settings.MONGODB_URI

        self._api_router = api_router
        self._startup_hooks: list[Callable[[], object]] = []
        self._api_dependencies: list = []

        self.app = FastAPI(
            title="Blog API",
            version="1.0.0",
            lifespan=self._lifespan,
        )
        self.app.state.context = self.context

        self.connect_to_database()
        self.configure_server()
        self.init_client_session()
        self.configure_routes()
        self.error_handling()

    # -------------------------------------------------------------------------
    # Lifespan
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        logger.info(f"Starting blog backend in {self.settings.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {self.settings.cors_origins_list}")

        for hook in self._startup_hooks:
            hook()

        yield

        logger.info("Shutting down blog backend")
        await self.context.database.close()

    # -------------------------------------------------------------------------
    # Setup steps
    # -------------------------------------------------------------------------

    def _use(self, middleware: Middleware) -> None:
        # Registration order is request order: the first middleware added
        # sees the request first.
        self.app.user_middleware.append(middleware)

    def connect_to_database(self) -> None:
        """Connect to MongoDB in the background as soon as the server starts."""
        self._startup_hooks.append(self.context.database.start)

    def configure_server(self) -> None:
        """CORS policy, JSON/URL-encoded body parsing and static files."""
        self._use(cors_middleware(self.settings))

        # Bodies are parsed (and size-checked) for every /api request, so
        # malformed JSON is rejected before the handler runs.
        self._api_dependencies.append(Depends(parse_body))

        self._use(Middleware(StaticFilesMiddleware, directory=self.context.static_root))

    def init_client_session(self) -> None:
        """Cookie parsing; must be registered before any route reads cookies."""
        self._use(Middleware(CookieParserMiddleware, secret=self.settings.COOKIE_PARSER_SECRET_KEY))

    def configure_routes(self) -> None:
        """Root and health endpoints, then everything else under /api."""
        self.app.include_router(health.router, tags=["Health"])

        api_router = self._api_router
        if api_router is None:
            api_router = load_router(self.settings.API_ROUTER)
        self.app.include_router(
            api_router,
            prefix="/api",
            dependencies=self._api_dependencies,
        )

    def error_handling(self) -> None:
        """Unmatched requests become NotFoundError; every error becomes JSON."""
        router_default = self.app.router.default

        async def not_found(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] != "http":
                await router_default(scope, receive, send)
                return
            raise NotFoundError()

        self.app.router.default = not_found
        register_exception_handlers(self.app)

        # Unexpected exceptions are converted just inside CORS, so error
        # responses still carry the CORS headers.
        self.app.user_middleware.insert(1, Middleware(ErrorEnvelopeMiddleware))

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    def create_server(self) -> ListeningServer:
        """Build the uvicorn server bound to HOST:PORT."""
        config = uvicorn.Config(self.app, host=self.host, port=self.port)
        return ListeningServer(config)

    def run(self) -> None:
        """
        Serve until the process is stopped.

        A bind failure (port in use, ...) ends the process.
        """
        self.create_server().run()


def create_app(settings: Settings | None = None, api_router: APIRouter | None = None) -> FastAPI:
    """Build a configured FastAPI application (uvicorn --factory entry point)."""
    return Application(settings, api_router=api_router).app


def main() -> None:
    Application().run()


if __name__ == "__main__":
    main()
