# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Edit API:
# - test_activity_service.py: recorder and daily aggregator logic
# - test_editor_routes.py: /api/editor endpoints
# - test_editor_session_store.py: Supabase persistence (mocked client)
# - test_auth.py: bearer-token verification
# - test_timezone.py, test_models.py, test_health.py
#
# Run tests with: pytest
# =============================================================================
