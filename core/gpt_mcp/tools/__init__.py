"""MCP tools exposed by the GPT MCP server."""
