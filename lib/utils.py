# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import uuid


# =============================================================================
# ID Utilities
# =============================================================================

def new_id() -> str:
    """
    Generate a fresh identifier for a post, like or comment.

    Example:
        post_id = new_id()  # "550e8400-e29b-41d4-a716-446655440000"
    """
    return str(uuid.uuid4())


# =============================================================================
# Text Utilities
# =============================================================================

def clip_text(value: str | None, max_length: int) -> str:
    """
    Clip text to at most `max_length` characters.

    None becomes the empty string.
    """
    if not value:
        return ""
    return value[:max_length]
