"""
Client-safe error messages.

Exception text from the engine or a descriptor source can carry file paths,
traceback fragments or internal module names. Anything that looks like that
is swapped for a generic message per status code; the original stays in the
server log.
"""

from __future__ import annotations

import re

from flavorwheel.observability.logging import get_logger

logger = get_logger(__name__)

_LEAK_PATTERNS: dict[str, re.Pattern[str]] = {
    "posix_path": re.compile(r"/\S+\.py"),
    "windows_path": re.compile(r"[A-Za-z]:\\\S+"),
    "traceback": re.compile(r"Traceback \(most recent call last\)|File \".*\"|line \d+"),
    "module": re.compile(r"flavorwheel\.[a-z_.]+"),
    "library": re.compile(r"cachetools|pydantic|starlette", re.IGNORECASE),
}

GENERIC_MESSAGES: dict[int, str] = {
    400: "Invalid request. Please check your input and try again.",
    404: "Resource not found.",
    422: "Invalid data format.",
    429: "Too many requests. Please try again later.",
    500: "An internal error occurred. Please try again later.",
    503: "Service temporarily unavailable.",
}
FALLBACK_MESSAGE = "An error occurred."

MAX_CLIENT_MESSAGE_LENGTH = 200


def sanitize_error_message(message: str, status_code: int = 500) -> str:
    """
    Return ``message`` if it is safe to show a client, else a generic message.

    5xx detail is never shown; scope and validation errors (4xx) pass through
    when short and free of internals.
    """
    generic = GENERIC_MESSAGES.get(status_code, FALLBACK_MESSAGE)
    if status_code >= 500 or not message or len(message) > MAX_CLIENT_MESSAGE_LENGTH:
        return generic

    for kind, pattern in _LEAK_PATTERNS.items():
        if pattern.search(message):
            logger.warning("Replaced client error message containing %s", kind)
            return generic
    return message
