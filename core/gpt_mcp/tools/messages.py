"""Multi-turn conversation tool.

The caller's message list is forwarded in order. When ``instructions`` is
given it is sent as a leading developer message, which does not count
towards ``message_count`` in the result.
"""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult

from gpt_mcp.context import ServerContext
from gpt_mcp.llm.variants import ApiVariant
from gpt_mcp.tools.base import MessagesInput, input_schema
from gpt_mcp.tools.generation import run_tool

_DESCRIPTION = """Generate text using GPT with structured multi-turn conversation messages.

This tool enables multi-turn conversations by accepting an array of messages
with alternating user/assistant roles. Use this for contextual conversations
where previous exchanges inform the response.

Args:
  - messages (array, required): Conversation history
    - role: "user" (human), "assistant" (AI response), or "developer" (system)
    - content: The message text
  - model, instructions, reasoning_effort, max_output_tokens, temperature,
    top_p, response_format: same as gpt_generate

Returns:
  AI response continuing the conversation.

Example messages:
  [
    { "role": "user", "content": "What is the capital of France?" },
    { "role": "assistant", "content": "The capital of France is Paris." },
    { "role": "user", "content": "What is its population?" }
  ]"""


class MessagesTool:
    """Continue a conversation with GPT."""

    def __init__(self, context: ServerContext) -> None:
        self._context = context

    @staticmethod
    def definition(variant: ApiVariant) -> dict[str, Any]:
        """Return the tool discovery definition for ``variant``."""
        return {
            "name": "gpt_messages",
            "title": "GPT Multi-turn Conversation",
            "description": _DESCRIPTION,
            "inputSchema": input_schema(MessagesInput, variant.reasoning_efforts),
            "annotations": {
                "readOnlyHint": True,
                "destructiveHint": False,
                "idempotentHint": False,
                "openWorldHint": True,
            },
        }

    def get_definition(self) -> dict[str, Any]:
        """Return the tool discovery definition."""
        return self.definition(self._context.variant)

    async def call(self, arguments: dict[str, Any]) -> CallToolResult:
        """Execute the conversation turn.

        Args:
            arguments: Tool arguments (see ``MessagesInput``).

        Returns:
            CallToolResult with the reply or an error message.
        """
        return await run_tool(self._context, MessagesInput, arguments)
