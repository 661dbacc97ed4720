"""Process-wide server context.

Everything a tool needs beyond its own arguments is collected here during
startup and passed to each tool by reference. The context is immutable, so
concurrent tool calls can share it without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from gpt_mcp.config import Config
from gpt_mcp.llm.selector import ActiveModelState
from gpt_mcp.llm.variants import ApiVariant, get_variant


class UpstreamClient(Protocol):
    """The slice of the OpenAI client used by the tools."""

    async def create(self, variant: ApiVariant, payload: dict[str, Any]) -> Any:
        """Send one generation request and return the raw response."""
        raise NotImplementedError


@dataclass(frozen=True)
class ServerContext:
    """Configuration, resolved model state and upstream client."""

    config: Config
    model_state: ActiveModelState
    client: UpstreamClient

    @property
    def variant(self) -> ApiVariant:
        """The configured upstream endpoint family."""
        return get_variant(self.config.GPT_API_TYPE)
