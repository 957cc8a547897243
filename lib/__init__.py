# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase connection and typed table wrapper
# - utils.py: Shared utilities (ID generation, text clipping)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    RecordStore,
    SupabaseClientError,
    create_supabase_client,
    error_message,
)
from lib.utils import clip_text, new_id

__all__ = [
    # Supabase
    "RecordStore",
    "SupabaseClientError",
    "create_supabase_client",
    "error_message",
    # Utils
    "clip_text",
    "new_id",
]
