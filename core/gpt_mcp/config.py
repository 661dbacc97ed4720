"""GPT MCP Server configuration.

This module defines a frozen dataclass `Config` that centralizes runtime
configuration. It is built once at startup from environment variables via
`Config.from_env()` and handed to the server by reference; nothing reads the
environment after that.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from gpt_mcp.llm.exceptions import LLMConfigError
from gpt_mcp.llm.variants import get_variant

SERVER_NAME = "gpt-mcp-server"
SERVER_VERSION = "1.0.0"
FALLBACK_MODEL = "gpt-5.1-codex"
DEFAULT_API_TYPE = "responses"
DEFAULT_REASONING_EFFORT = "medium"
# Chat completions reject reasoning_effort for non-reasoning models.
DEFAULT_CHAT_REASONING_EFFORT = "none"
CHARACTER_LIMIT = 25_000


def _get(environ: Mapping[str, str], name: str, default: str | None = None) -> str | None:
    """Read an environment value, treating empty strings as unset."""
    value = environ.get(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


@dataclass(frozen=True)
class Config:  # pylint: disable=too-many-instance-attributes
    """Configuration for the GPT MCP Server.

    Attributes:
        OPENAI_API_KEY (str): Upstream credential (required).
        GPT_MODEL (str | None): Configured model override, validated at startup.
        GPT_API_TYPE (str): Upstream endpoint family ("responses" or "chat").
        GPT_REASONING_EFFORT (str): Effort used when a call does not set one.
            Defaults to "medium" for the responses API and "none" for chat.
        OPENAI_BASE_URL (str | None): Optional alternative API base URL.
        LOG_LEVEL (str): Logging level name for the stderr handler.
        FALLBACK_MODEL (str): Model used when no usable override exists.
        CHARACTER_LIMIT (int): Maximum characters returned by a tool call.
        SERVER_NAME (str): Service name exposed to MCP clients.
        SERVER_VERSION (str): Service version string.
    """

    OPENAI_API_KEY: str = field(repr=False)
    GPT_MODEL: str | None = None
    GPT_API_TYPE: str = DEFAULT_API_TYPE
    GPT_REASONING_EFFORT: str = DEFAULT_REASONING_EFFORT
    OPENAI_BASE_URL: str | None = None
    LOG_LEVEL: str = "INFO"

    FALLBACK_MODEL: str = FALLBACK_MODEL
    CHARACTER_LIMIT: int = CHARACTER_LIMIT
    SERVER_NAME: str = SERVER_NAME
    SERVER_VERSION: str = SERVER_VERSION

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build the configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests).

        Returns:
            A validated Config.

        Raises:
            LLMConfigError: If the API key is missing, or the API type or
                default reasoning effort is not supported.
        """
        env = os.environ if environ is None else environ

        api_key = _get(env, "OPENAI_API_KEY")
        if not api_key:
            raise LLMConfigError(
                "OPENAI_API_KEY environment variable is required.\n"
                "Get your API key at: https://platform.openai.com/api-keys"
            )

        api_type = (_get(env, "GPT_API_TYPE", DEFAULT_API_TYPE) or DEFAULT_API_TYPE).lower()
        variant = get_variant(api_type)

        default_effort = DEFAULT_CHAT_REASONING_EFFORT if variant.name == "chat" else DEFAULT_REASONING_EFFORT
        effort = (_get(env, "GPT_REASONING_EFFORT", default_effort) or default_effort).lower()
        if effort not in variant.reasoning_efforts:
            raise LLMConfigError(
                f"GPT_REASONING_EFFORT={effort!r} is not supported by the {variant.name!r} API "
                f"(expected one of: {', '.join(variant.reasoning_efforts)})"
            )

        return cls(
            OPENAI_API_KEY=api_key,
            GPT_MODEL=_get(env, "GPT_MODEL"),
            GPT_API_TYPE=api_type,
            GPT_REASONING_EFFORT=effort,
            OPENAI_BASE_URL=_get(env, "OPENAI_BASE_URL"),
            LOG_LEVEL=(_get(env, "GPT_MCP_LOG_LEVEL", "INFO") or "INFO").upper(),
        )
