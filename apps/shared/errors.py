"""
Error Handling

Error taxonomy for the blog service and a helper for logging server-side
failures with a correlation id.
"""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


class BlogServiceError(Exception):
    """Base exception for all blog service errors."""
    pass


class ClientInputError(BlogServiceError):
    """Raised when a request is missing required input or would break a post's invariants."""
    pass


class NotFoundError(BlogServiceError):
    """Raised when an id does not resolve to a stored record."""
    pass


class MediaStoreError(BlogServiceError):
    """Raised when the image-hosting service rejects an upload or delete."""
    pass


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Create post")
        user_message: Optional message to show the caller. If None, uses generic message.

    Returns:
        Tuple of (client_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    if user_message:
        message = f"{user_message} (Error ID: {error_id})"
    else:
        message = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return message, error_id
