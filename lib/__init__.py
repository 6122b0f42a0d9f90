# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Readiness-tracked MongoDB connection
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoConnection

__all__ = [
    "MongoConnection",
]
