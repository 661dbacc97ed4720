"""Classification of upstream failures into actionable messages.

``classify_error`` is total: every value maps to exactly one
``ClassifiedError``. Nothing here retries; the caller decides whether to try
again.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import openai

from gpt_mcp.llm.exceptions import LLMError


class ErrorKind(enum.Enum):
    """Closed set of failure categories surfaced to callers."""

    INVALID_CREDENTIALS = "invalid_credentials"
    QUOTA_EXCEEDED = "quota_exceeded"
    PERMISSION_DENIED = "permission_denied"
    MODEL_NOT_FOUND = "model_not_found"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"
    INTERNAL = "internal"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ClassifiedError:
    """A failure category plus the message shown to the caller."""

    kind: ErrorKind
    message: str


_STATUS_MESSAGES: dict[int, ClassifiedError] = {
    401: ClassifiedError(
        ErrorKind.INVALID_CREDENTIALS,
        "Error: Invalid API key. Please verify your OPENAI_API_KEY at platform.openai.com/api-keys",
    ),
    402: ClassifiedError(
        ErrorKind.QUOTA_EXCEEDED,
        "Error: API quota exceeded. Please check your billing at platform.openai.com/usage",
    ),
    403: ClassifiedError(
        ErrorKind.PERMISSION_DENIED,
        "Error: Permission denied. Your API key may not have access to this model.",
    ),
    404: ClassifiedError(
        ErrorKind.MODEL_NOT_FOUND,
        "Error: Model not found. Please check the model name is correct.",
    ),
    429: ClassifiedError(
        ErrorKind.RATE_LIMITED,
        "Error: Rate limit exceeded. Please wait and try again, or check your API quota.",
    ),
}

_TIMEOUT = ClassifiedError(
    ErrorKind.TIMEOUT,
    "Error: Request timed out. Please try again with a shorter prompt.",
)


def _status_of(error: BaseException) -> int | None:
    """Return the HTTP status carried by an upstream error, if any."""
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def _is_upstream(error: BaseException) -> bool:
    return isinstance(error, (openai.APIError, LLMError))


def _is_timeout(error: BaseException) -> bool:
    if isinstance(error, (openai.APITimeoutError, TimeoutError)):
        return True
    return _is_upstream(error) and "timeout" in str(error).lower()


def classify_error(error: object) -> ClassifiedError:
    """Map any failure value onto a caller-facing error.

    First match wins: known HTTP statuses, then timeouts, then any other
    upstream status, then exception passthrough, then everything else.

    Args:
        error: Exception (or arbitrary value) caught at the tool boundary.

    Returns:
        The ClassifiedError for ``error``.
    """
    if not isinstance(error, BaseException):
        return ClassifiedError(ErrorKind.UNEXPECTED, f"Error: Unexpected error occurred: {error!s}")

    status = _status_of(error) if _is_upstream(error) else None
    if status in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[status]

    if _is_timeout(error):
        return _TIMEOUT

    if status is not None:
        return ClassifiedError(ErrorKind.UPSTREAM, f"Error: OpenAI API error ({status}): {error}")

    message = str(error) or type(error).__name__
    return ClassifiedError(ErrorKind.INTERNAL, f"Error: {message}")
