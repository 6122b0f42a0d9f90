# =============================================================================
# app/routers/api.py - The /api Router
# =============================================================================
# Blog endpoints (posts, comments, users, auth) register on `router`; the
# bootstrap mounts it at /api after CORS, body and cookie handling and
# before the error handlers.
#
# A different router can be mounted with API_ROUTER="package.module:attr".
# =============================================================================

import importlib
import logging

from fastapi import APIRouter

logger = logging.getLogger(__name__)

router = APIRouter()


def load_router(path: str) -> APIRouter:
    """
    Import a router from a 'module:attribute' path.

    Raises:
        ValueError: If the path is malformed or doesn't name an APIRouter
        ImportError: If the module can't be imported
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"API_ROUTER must look like 'package.module:attribute', got {path!r}")

    module = importlib.import_module(module_name)
    try:
        loaded = getattr(module, attribute)
    except AttributeError as e:
        raise ValueError(f"Module {module_name!r} has no attribute {attribute!r}") from e

    if not isinstance(loaded, APIRouter):
        raise ValueError(f"{path!r} is a {type(loaded).__name__}, not an APIRouter")

    logger.debug(f"Loaded /api router from {path}")
    return loaded
