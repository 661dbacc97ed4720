"""Character limit enforcement for tool output."""

from __future__ import annotations

from dataclasses import dataclass

TRUNCATION_NOTICE = (
    "\n\n[Response truncated: {original} characters exceeded the {limit} character limit. "
    "Set max_output_tokens to request a shorter response.]"
)


@dataclass(frozen=True)
class TruncationResult:
    """Text after the character limit was applied."""

    text: str
    truncated: bool


def truncate(text: str, limit: int) -> TruncationResult:
    """Cap ``text`` at ``limit`` characters.

    The cut is a plain character slice with no word-boundary handling. It is
    meant to run on the final rendered output, so a JSON payload may end up
    cut mid-structure.

    Args:
        text: Rendered tool output.
        limit: Maximum number of characters kept from ``text``.

    Returns:
        TruncationResult with the notice appended when anything was cut.
    """
    if len(text) <= limit:
        return TruncationResult(text=text, truncated=False)
    notice = TRUNCATION_NOTICE.format(original=len(text), limit=limit)
    return TruncationResult(text=text[:limit] + notice, truncated=True)
