# =============================================================================
# app/context.py - Application Context
# =============================================================================
# Everything a request handler may need from the running application, built
# once by the Application bootstrap and stored on `app.state.context`.
#
# Handlers get it through dependency injection (see app/dependencies.py)
# instead of importing module-level singletons.
# =============================================================================

from dataclasses import dataclass
from pathlib import Path

from app.config import Settings
from lib.mongo_client import MongoConnection


@dataclass(frozen=True)
class AppContext:
    """Settings and shared resources of one application instance."""

    settings: Settings
    database: MongoConnection
    static_root: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            database=MongoConnection(
                settings.MONGODB_URI,
                auth_source=settings.MONGODB_AUTH_SOURCE,
                timeout_ms=settings.MONGODB_TIMEOUT_MS,
            ),
            static_root=settings.static_root,
        )
