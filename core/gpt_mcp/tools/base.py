"""Common tool patterns and small helpers for the GPT MCP tools.

This module defines the small runtime protocol used by MCP tools (`MCPTool`),
the pydantic models that validate tool arguments, and helpers for building
MCP `CallToolResult` payloads.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, cast

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from gpt_mcp.llm.types import GenerationRequest, Message, OutputFormat, ReasoningEffort


class MCPTool(Protocol):
    """Protocol describing a minimal MCP tool implementation.

    Implementations must provide `get_definition` and an async `call` method.
    """

    def get_definition(self) -> dict[str, Any]:
        """Return a serializable definition describing the tool."""
        raise NotImplementedError

    async def call(self, arguments: dict[str, Any]) -> CallToolResult:
        """Execute the tool with the provided arguments."""
        raise NotImplementedError


class ToolInput(BaseModel):
    """Base for tool arguments; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class ChatMessage(ToolInput):
    """One conversation message supplied by the caller."""

    role: Literal["user", "assistant", "developer"] = Field(
        description="Message role: 'user' for human, 'assistant' for AI, 'developer' for system",
    )
    content: str = Field(min_length=1, description="The message content")


class GenerationOptions(ToolInput):
    """Optional parameters shared by the generation tools."""

    model: str | None = Field(
        default=None,
        description="GPT model variant to use (defaults to GPT_MODEL env or the fallback model)",
    )
    instructions: str | None = Field(default=None, description="System instructions for the model")
    reasoning_effort: ReasoningEffort | None = Field(default=None, description="Reasoning effort level")
    max_output_tokens: int | None = Field(default=None, ge=1, description="Maximum tokens to generate")
    temperature: float | None = Field(default=None, ge=0, le=2, description="Temperature for randomness (0-2)")
    top_p: float | None = Field(default=None, ge=0, le=1, description="Top-p sampling parameter")
    response_format: OutputFormat = Field(
        default="markdown",
        description="Output format: 'markdown' for readable text, 'json' for structured output",
    )

    @field_validator("reasoning_effort")
    @classmethod
    def _effort_supported(cls, value: str | None, info: ValidationInfo) -> str | None:
        """Reject efforts the configured API variant does not accept."""
        allowed = (info.context or {}).get("reasoning_efforts")
        if value is not None and allowed and value not in allowed:
            raise ValueError(f"reasoning_effort must be one of: {', '.join(allowed)}")
        return value

    def to_request(self, prompt: str | tuple[Message, ...]) -> GenerationRequest:
        """Build the immutable GenerationRequest for this call."""
        return GenerationRequest(
            prompt=prompt,
            model=self.model,
            instructions=self.instructions,
            reasoning_effort=self.reasoning_effort,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            output_format=self.response_format,
        )


class GenerateInput(GenerationOptions):
    """Arguments of gpt_generate."""

    input: str = Field(min_length=1, description="The input text or prompt for GPT")

    def to_generation_request(self) -> GenerationRequest:
        return self.to_request(self.input)


class MessagesInput(GenerationOptions):
    """Arguments of gpt_messages."""

    messages: list[ChatMessage] = Field(min_length=1, description="Array of conversation messages")

    def to_generation_request(self) -> GenerationRequest:
        conversation = tuple(cast(Message, {"role": m.role, "content": m.content}) for m in self.messages)
        return self.to_request(conversation)


class StatusInput(ToolInput):
    """gpt_status takes no arguments."""


def input_schema(model: type[BaseModel], reasoning_efforts: tuple[str, ...] | None = None) -> dict[str, Any]:
    """JSON schema for a tool input model.

    Args:
        model: Pydantic input model.
        reasoning_efforts: When given, narrows the reasoning_effort enum to
            the values the configured API variant accepts.

    Returns:
        JSON schema suitable for an MCP tool ``inputSchema``.
    """
    schema = model.model_json_schema()
    effort = schema.get("properties", {}).get("reasoning_effort")
    if effort is not None and reasoning_efforts:
        for option in effort.get("anyOf", [effort]):
            if "enum" in option:
                option["enum"] = list(reasoning_efforts)
    return schema


def validation_message(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "Input validation error: " + "; ".join(parts)


def text_content(text: str) -> list[TextContent]:
    """Create a simple text content payload for MCP responses.

    Args:
        text: Human-readable text to include in the response.
    """
    return [TextContent(type="text", text=text)]


def tool_result(text: str, structured: dict[str, Any] | None = None) -> CallToolResult:
    """Successful tool result with an optional structured echo."""
    return CallToolResult(content=text_content(text), structuredContent=structured, isError=False)


def error_result(message: str) -> CallToolResult:
    """Failed tool result; the process keeps serving."""
    return CallToolResult(content=text_content(message), isError=True)


__all__ = [
    "ChatMessage",
    "GenerateInput",
    "MCPTool",
    "MessagesInput",
    "StatusInput",
    "error_result",
    "input_schema",
    "text_content",
    "tool_result",
    "validation_message",
]
