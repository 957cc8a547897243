# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for API responses
# - services/: Post, comment and storage operations
#
# Services receive their store clients explicitly rather than
# reaching for module-level singletons.
# =============================================================================
