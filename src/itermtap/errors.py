"""Shared error handling utilities for itermtap commands.

Commands catch the domain errors they expect and turn them into one
descriptive message through these helpers.

PUBLIC API:
  - markdown_error_response: Create error response for markdown display
  - table_error_response: Create error response for table display
  - describe_error: One-line description of a domain error
"""

import logging
from typing import Any

from .bridge import BridgeInvocationError, HostApplicationUnavailableError, SessionNotFoundError
from .process import CompletionTimeoutError

logger = logging.getLogger(__name__)


def describe_error(error: Exception) -> tuple[str, str]:
    """Describe a domain error.

    Args:
        error: Exception raised by a bridge or terminal operation.

    Returns:
        (kind, message) where kind is a short machine-friendly label.
    """
    if isinstance(error, SessionNotFoundError):
        return "session_not_found", str(error)
    if isinstance(error, HostApplicationUnavailableError):
        return "host_unavailable", str(error)
    if isinstance(error, BridgeInvocationError):
        return "bridge_failure", str(error)
    if isinstance(error, CompletionTimeoutError):
        return "timeout", str(error)
    if isinstance(error, ValueError):
        return "invalid_input", str(error)
    return "error", str(error)


def markdown_error_response(error: Exception | str, **frontmatter: Any) -> dict[str, Any]:
    """Create error response for markdown display commands.

    Args:
        error: The exception or message to display.
        **frontmatter: Extra frontmatter fields (e.g., session).

    Returns:
        Markdown display dict with error element
    """
    if isinstance(error, Exception):
        kind, message = describe_error(error)
    else:
        kind, message = "error", error

    return {
        "elements": [{"type": "text", "content": f"Error: {message}"}],
        "frontmatter": {"status": "error", "error": kind, **frontmatter},
    }


def table_error_response(message: str) -> list[dict[str, Any]]:
    """Create error response for table display commands.

    Args:
        message: The error message (will be logged)

    Returns:
        Empty list (tables show nothing on error)
    """
    logger.warning(f"Command failed: {message}")
    return []
