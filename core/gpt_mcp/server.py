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

"""
GPT MCP Server entry point. "Stdio server".

Uses the official MCP stdio transport. stdout carries the protocol, so all
diagnostics go to stderr through `logging`.

Run:
  npx @modelcontextprotocol/inspector python3 -m gpt_mcp.server
  python3 -m gpt_mcp.server
"""

from __future__ import annotations

import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server

from gpt_mcp.config import Config
from gpt_mcp.context import ServerContext
from gpt_mcp.core import create_server
from gpt_mcp.llm.exceptions import LLMConfigError
from gpt_mcp.llm.openai_client import OpenAILLMClient
from gpt_mcp.llm.selector import resolve_active_model

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr, keeping stdout free for MCP messages."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> Config:
    """Build the configuration or exit the process.

    Raises:
        SystemExit: With status 1 when configuration is invalid.
    """
    try:
        return Config.from_env()
    except LLMConfigError as exc:
        logger.error("ERROR: %s", exc)
        raise SystemExit(1) from exc


async def build_context(config: Config, client: OpenAILLMClient) -> ServerContext:
    """Resolve the active model and assemble the server context.

    This runs before the transport is opened, so no tool is reachable until
    model validation has finished.
    """
    model_state = await resolve_active_model(config.GPT_MODEL, config.FALLBACK_MODEL, client.list_models)
    return ServerContext(config=config, model_state=model_state, client=client)


async def main() -> None:
    """Run the GPT MCP stdio server.

    Validates configuration, resolves the active model, then serves the
    application returned by ``create_server()`` over the stdio transport.
    """
    configure_logging()
    config = load_config()
    logging.getLogger().setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    client = OpenAILLMClient(config)
    try:
        context = await build_context(config, client)
        app: Server = create_server(context)
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "%s v%s running on stdio (model: %s, api: %s)",
                config.SERVER_NAME,
                config.SERVER_VERSION,
                context.model_state.active_id,
                config.GPT_API_TYPE,
            )
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )
    finally:
        await client.close()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
