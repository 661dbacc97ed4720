"""Normalized types for LLM interactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict


Role = Literal["user", "assistant", "developer"]
ReasoningEffort = Literal["none", "minimal", "low", "medium", "high"]
OutputFormat = Literal["markdown", "json"]


class Message(TypedDict):
    """Caller-supplied chat message."""

    role: Role
    content: str


@dataclass(frozen=True)
class TokenUsage:
    """Token usage, identical whichever endpoint family produced it."""

    input_tokens: int
    output_tokens: int
    total_tokens: int

    def to_dict(self) -> dict[str, int]:
        """Return the usage counters as a plain dict."""
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class GenerationRequest:  # pylint: disable=too-many-instance-attributes
    """One validated tool call, ready to be translated for the upstream API.

    ``prompt`` is either a single prompt string or the ordered conversation.
    Every optional field left as ``None`` means "not supplied by the caller"
    and is never sent upstream.
    """

    prompt: str | tuple[Message, ...]
    model: str | None = None
    instructions: str | None = None
    reasoning_effort: ReasoningEffort | None = None
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    output_format: OutputFormat = "markdown"

    @property
    def is_conversation(self) -> bool:
        """Whether this request carries a message list rather than a prompt."""
        return not isinstance(self.prompt, str)

    @property
    def message_count(self) -> int | None:
        """Number of caller messages, or None for single-prompt requests."""
        if isinstance(self.prompt, str):
            return None
        return len(self.prompt)


@dataclass(frozen=True)
class LLMResponse:
    """Upstream payload reduced to the fields the server cares about."""

    text: str
    model: str | None = None
    usage: TokenUsage | None = None
    raw: Any = None


@dataclass(frozen=True)
class NormalizedResult:
    """Stable result shape returned to callers for every API variant."""

    text: str
    model_used: str
    usage: TokenUsage | None = None
    truncated: bool = False
    message_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the result, omitting usage/message_count when unknown.

        Omitted usage is not the same as zero usage, so the key is left out
        rather than filled with zeros.
        """
        out: dict[str, Any] = {
            "text": self.text,
            "model": self.model_used,
            "truncated": self.truncated,
        }
        if self.usage is not None:
            out["usage"] = self.usage.to_dict()
        if self.message_count is not None:
            out["message_count"] = self.message_count
        return out
