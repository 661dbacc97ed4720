"""Exceptions raised by the GPT MCP server itself.

Upstream failures are not wrapped: ``openai.APIError`` and its subclasses
travel unchanged to the tool boundary, where ``classify_error`` turns them
into caller-facing messages.
"""


class LLMError(RuntimeError):
    """Base exception for all server-side LLM errors."""


class LLMConfigError(LLMError):
    """Raised when configuration is missing or invalid.

    This is fatal during startup: the process exits before any tool is
    reachable.
    """
