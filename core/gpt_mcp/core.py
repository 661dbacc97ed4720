# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.
#
# Authors
# - Paul Nilsson, paul.nilsson@cern.ch, 2026

"""Core MCP server wiring.

This module creates the MCP Server instance and registers the tools. The
tools receive the immutable ServerContext built during startup; no tool
reads process-wide mutable state.
"""

from __future__ import annotations

from typing import Any

from mcp.server import Server
from mcp.types import CallToolResult, Tool

from gpt_mcp.context import ServerContext
from gpt_mcp.llm.variants import ApiVariant
from gpt_mcp.tools.base import MCPTool
from gpt_mcp.tools.generate import GenerateTool
from gpt_mcp.tools.messages import MessagesTool
from gpt_mcp.tools.status import StatusTool

TOOL_CLASSES = (GenerateTool, MessagesTool, StatusTool)


def build_tools(context: ServerContext) -> dict[str, MCPTool]:
    """Instantiate every tool for ``context``, keyed by tool name."""
    tools: dict[str, MCPTool] = {}
    for cls in TOOL_CLASSES:
        tool = cls(context)
        tools[tool.get_definition()["name"]] = tool
    return tools


def tool_definitions(variant: ApiVariant) -> list[dict[str, Any]]:
    """Tool discovery definitions for ``variant`` without a live context."""
    return [cls.definition(variant) for cls in TOOL_CLASSES]


def create_server(context: ServerContext) -> Server:
    """Create and configure the MCP Server instance.

    Args:
        context: Startup context shared by all tools.

    Returns:
        The configured low-level MCP Server.
    """
    app: Server = Server(context.config.SERVER_NAME, version=context.config.SERVER_VERSION)
    tools = build_tools(context)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """Return the set of registered tools."""
        return [Tool(**tool.get_definition()) for tool in tools.values()]

    @app.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Invoke a registered tool by name.

        Args:
            name: Name of the tool to call.
            arguments: JSON-like mapping of arguments for the tool.

        Returns:
            CallToolResult produced by the called tool.

        Raises:
            ValueError: If the requested tool name is unknown.
        """
        tool = tools.get(name)
        if not tool:
            raise ValueError(f"Unknown tool: {name}")
        return await tool.call(arguments or {})

    return app
