# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the blog backend:
# - test_config.py: Settings defaults and environment overrides
# - test_exceptions.py: Error taxonomy and the JSON error envelope
# - test_mongo_client.py: MongoDB connection readiness (mocked driver)
# - test_body.py: JSON / URL-encoded body parsing
# - test_cookies.py: Signed-cookie helpers and middleware
# - test_app.py: The assembled application over HTTP
#
# Run tests with: pytest
# =============================================================================
