"""Single-prompt generation tool."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult

from gpt_mcp.context import ServerContext
from gpt_mcp.llm.variants import ApiVariant
from gpt_mcp.tools.base import GenerateInput, input_schema
from gpt_mcp.tools.generation import run_tool

_DESCRIPTION = """Generate text using the OpenAI GPT API with a simple input prompt.

This tool sends a prompt to GPT and returns the generated text response.
It is ideal for single-turn interactions, creative writing, code generation,
analysis, and general AI assistance tasks.

Args:
  - input (string, required): The prompt or question for GPT
  - model (string, optional): Model to use (defaults to GPT_MODEL env or the fallback model)
  - instructions (string, optional): System instructions for the model
  - reasoning_effort (string, optional): Reasoning effort level
  - max_output_tokens (number, optional): Maximum output length
  - temperature (number, optional): Randomness 0-2 (higher = more creative)
  - top_p (number, optional): Top-p sampling parameter
  - response_format (string, optional): 'markdown' (default) or 'json'

Returns:
  Generated text response from GPT, followed by token usage when available.

Note: Each call may produce different results due to model randomness."""


class GenerateTool:
    """Send one prompt to GPT and return the generated text."""

    def __init__(self, context: ServerContext) -> None:
        self._context = context

    @staticmethod
    def definition(variant: ApiVariant) -> dict[str, Any]:
        """Return the tool discovery definition for ``variant``."""
        return {
            "name": "gpt_generate",
            "title": "Generate Text with GPT",
            "description": _DESCRIPTION,
            "inputSchema": input_schema(GenerateInput, variant.reasoning_efforts),
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
        """Execute the generation.

        Args:
            arguments: Tool arguments (see ``GenerateInput``).

        Returns:
            CallToolResult with the generated text or an error message.
        """
        return await run_tool(self._context, GenerateInput, arguments)
