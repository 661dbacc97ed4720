"""GPT MCP Server: OpenAI text generation exposed as MCP tools."""

from gpt_mcp.config import SERVER_VERSION

__version__ = SERVER_VERSION
