"""GPT MCP command-line interface.

Supports:

  - `gpt-mcp serve`                 run the stdio MCP server
  - `gpt-mcp tools list [--json]`   print the tool definitions

Listing tools needs no credentials and makes no network calls.
"""

from __future__ import annotations

import argparse
import json
import sys

from gpt_mcp import server
from gpt_mcp.config import DEFAULT_API_TYPE
from gpt_mcp.core import tool_definitions
from gpt_mcp.llm.variants import get_variant


def cmd_tools_list(args: argparse.Namespace) -> int:
    """Print the tool definitions for the chosen API type.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Process exit code.
    """
    defs = tool_definitions(get_variant(args.api_type))
    if args.json:
        print(json.dumps(defs, indent=2, sort_keys=True))
        return 0

    w_name = max(len(d["name"]) for d in defs)
    for d in defs:
        print(f"{d['name']:<{w_name}}  {d['title']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the stdio server until the client disconnects."""
    del args
    server.run()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entry point.

    Args:
        argv: Optional list of CLI arguments excluding the program name.

    Returns:
        Process exit code.
    """
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="gpt-mcp")
    sub = p.add_subparsers(dest="cmd", required=True)

    serve = sub.add_parser("serve", help="Run the MCP server over stdio")
    serve.set_defaults(func=cmd_serve)

    tools = sub.add_parser("tools", help="Tooling commands")
    tools_sub = tools.add_subparsers(dest="tools_cmd", required=True)

    tools_list = tools_sub.add_parser("list", help="List tool definitions")
    tools_list.add_argument("--json", action="store_true", help="Output JSON")
    tools_list.add_argument(
        "--api-type",
        choices=("responses", "chat"),
        default=DEFAULT_API_TYPE,
        help="Upstream API variant the definitions are built for",
    )
    tools_list.set_defaults(func=cmd_tools_list)

    ns = p.parse_args(argv)
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
