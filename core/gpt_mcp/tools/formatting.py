"""Rendering of generation results for the caller."""

from __future__ import annotations

import json
from typing import Any

from gpt_mcp.llm.types import NormalizedResult, OutputFormat


def usage_footer(result: NormalizedResult) -> str:
    """Markdown usage line, or an empty string when usage is unknown."""
    if result.usage is None:
        return ""
    u = result.usage
    return (
        f"\n\n---\n**Usage:** {u.input_tokens} input tokens, "
        f"{u.output_tokens} output tokens, {u.total_tokens} total"
    )


def format_markdown(result: NormalizedResult) -> str:
    """Model text followed by the usage footer."""
    return result.text + usage_footer(result)


def format_json(result: NormalizedResult) -> str:
    """JSON document with model, text and (when known) usage/message count."""
    payload: dict[str, Any] = {"model": result.model_used, "text": result.text}
    if result.usage is not None:
        payload["usage"] = result.usage.to_dict()
    if result.message_count is not None:
        payload["message_count"] = result.message_count
    return json.dumps(payload, ensure_ascii=False, indent=2)


def render(result: NormalizedResult, output_format: OutputFormat) -> str:
    """Render ``result`` in the requested format (before truncation)."""
    if output_format == "json":
        return format_json(result)
    return format_markdown(result)
