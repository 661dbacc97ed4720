"""OpenAI LLM client implementation."""

from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from gpt_mcp.config import Config
from gpt_mcp.llm.variants import ApiVariant


class OpenAILLMClient:
    """Thin wrapper around ``openai.AsyncOpenAI``.

    SDK errors are not caught here; they reach the tool boundary unchanged so
    the classifier can read their HTTP status. SDK retries are disabled:
    every failure is surfaced once.
    """

    def __init__(self, config: Config) -> None:
        """Initialize the client from configuration.

        Args:
            config: Server configuration holding the API key and base URL.
        """
        self._config = config
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        """Lazily create the SDK client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.OPENAI_API_KEY,
                base_url=self._config.OPENAI_BASE_URL,
                max_retries=0,
            )
        return self._client

    async def list_models(self) -> list[str]:
        """Return the ids of all models visible to the API key."""
        client = self._get_client()
        return [model.id async for model in client.models.list()]

    async def create(self, variant: ApiVariant, payload: dict[str, Any]) -> Any:
        """Send one generation request through the configured variant.

        Args:
            variant: Upstream endpoint family.
            payload: Keyword arguments built by ``build_upstream_request``.

        Returns:
            The raw SDK response object.
        """
        return await variant.invoke(self._get_client(), payload)

    async def close(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.close()
            self._client = None
