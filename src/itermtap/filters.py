"""Composable output filter functions for itermtap reads.

Terminal buffers can carry large embedded payloads (inline images, pasted
blobs) that drown the text an agent actually needs.

PUBLIC API:
  - filter_inline_images: Replace inline-image escape sequences with a placeholder
  - filter_base64_content: Replace long base64 runs (and inline images) with placeholders
  - BASE64_PLACEHOLDER, INLINE_IMAGE_PLACEHOLDER: The placeholder tokens
"""

import re

BASE64_PLACEHOLDER = "[base64 content filtered]"
INLINE_IMAGE_PLACEHOLDER = "[inline image filtered]"

# iTerm2 inline image protocol: ESC ] 1337 ; File=... terminated by BEL or ST
_INLINE_IMAGE = re.compile(r"\x1b\]1337;File=[^\x07\x1b]*(?:\x07|\x1b\\)")
_BASE64_RUN = re.compile(r"[A-Za-z0-9+/]{100,}={0,2}")


def filter_inline_images(content: str) -> str:
    """Replace iTerm2 inline image sequences with a placeholder.

    Args:
        content: The text content to filter.
    """
    if not content:
        return content
    return _INLINE_IMAGE.sub(INLINE_IMAGE_PLACEHOLDER, content)


def filter_base64_content(content: str) -> str:
    """Replace long base64-looking runs with a placeholder.

    Inline image sequences are replaced first, then every run of 100 or more
    base64-alphabet characters together with its "=" padding. Shorter tokens
    and the surrounding text are untouched.

    Args:
        content: The text content to filter.

    Returns:
        Content with payloads replaced.
    """
    if not content:
        return content
    return _BASE64_RUN.sub(BASE64_PLACEHOLDER, filter_inline_images(content))
