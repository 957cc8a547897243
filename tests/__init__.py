# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Private Photos API:
# - test_posts_api.py / test_comments_api.py: Endpoint tests with in-memory stores
# - test_frontend.py: Health checks and static serving
# - test_supabase_client.py: Store clients against a mocked Supabase client
# - test_post_service.py: Pure helpers
#
# Run tests with: pytest
# =============================================================================
