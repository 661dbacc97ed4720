"""Server status tool."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult
from pydantic import ValidationError

from gpt_mcp.context import ServerContext
from gpt_mcp.llm.variants import ApiVariant
from gpt_mcp.tools.base import StatusInput, error_result, input_schema, tool_result, validation_message


class StatusTool:
    """Report the active model and static configuration.

    This tool never contacts the upstream API; it reads the context built at
    startup and is safe to call repeatedly.
    """

    def __init__(self, context: ServerContext) -> None:
        self._context = context

    @staticmethod
    def definition(_variant: ApiVariant) -> dict[str, Any]:
        """Return the tool discovery definition.

        The definition does not depend on the API variant.
        """
        return {
            "name": "gpt_status",
            "title": "GPT Server Status",
            "description": (
                "Check GPT MCP server status and configuration: the active model, the "
                "configured GPT_MODEL and whether it fell back to the default model, the "
                "default reasoning effort, the output character limit, the server version "
                "and whether OPENAI_API_KEY is set."
            ),
            "inputSchema": input_schema(StatusInput),
            "annotations": {
                "readOnlyHint": True,
                "destructiveHint": False,
                "idempotentHint": True,
                "openWorldHint": False,
            },
        }

    def get_definition(self) -> dict[str, Any]:
        """Return the tool discovery definition."""
        return self.definition(self._context.variant)

    def status(self) -> dict[str, Any]:
        """Collect the status fields."""
        config = self._context.config
        state = self._context.model_state
        return {
            "active_model": state.active_id,
            "configured_model": state.configured_id,
            "fallback_model": state.fallback_id,
            "fallback_used": state.fallback_used,
            "default_reasoning": config.GPT_REASONING_EFFORT,
            "character_limit": config.CHARACTER_LIMIT,
            "server_version": config.SERVER_VERSION,
            "api_key_configured": bool(config.OPENAI_API_KEY),
            "api_type": config.GPT_API_TYPE,
        }

    @staticmethod
    def format_status(status: dict[str, Any]) -> str:
        """Render the status fields as markdown."""
        lines = ["**GPT MCP Server Status**", "", f"- **Active Model:** {status['active_model']}"]

        if status["configured_model"]:
            marker = "(not found, using fallback)" if status["fallback_used"] else "(ok)"
            lines.append(f"- **Configured Model:** {status['configured_model']} {marker}")
        else:
            lines.append("- **Configured Model:** (not set, using default)")

        lines.extend(
            [
                f"- **Fallback Model:** {status['fallback_model']}",
                f"- **API Type:** {status['api_type']}",
                f"- **Default Reasoning Effort:** {status['default_reasoning']}",
                f"- **Character Limit:** {status['character_limit']}",
                f"- **Server Version:** {status['server_version']}",
                f"- **API Key:** {'configured' if status['api_key_configured'] else 'missing'}",
            ]
        )
        return "\n".join(lines) + "\n"

    async def call(self, arguments: dict[str, Any]) -> CallToolResult:
        """Return the server status.

        Args:
            arguments: Must be empty; unknown keys are rejected.

        Returns:
            CallToolResult with a markdown summary and the status fields as
            structured content.
        """
        try:
            StatusInput.model_validate(arguments)
        except ValidationError as exc:
            return error_result(validation_message(exc))

        status = self.status()
        return tool_result(self.format_status(status), status)
