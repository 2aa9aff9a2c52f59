"""CLI entry point for the MCP bridge.

Invoked as ``mcp-bridge <server_script>`` (script entry point) or
``python -m mcp_bridge <server_script>``. Without ``--query`` it starts an
interactive loop; type ``quit`` or ``exit`` to stop.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from mcp_bridge import __version__
from mcp_bridge.client import MCPBridgeClient
from mcp_bridge.config import BridgeSettings
from mcp_bridge.exceptions import BridgeError
from mcp_bridge.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-bridge",
        description="Answer queries with a language model that can call tools of an MCP server",
    )
    parser.add_argument("--version", action="version", version=f"mcp-bridge {__version__}")
    parser.add_argument("server_script", help="Path to the MCP server script (.py or .js)")
    parser.add_argument("--query", "-q", default=None, help="Answer a single query and exit")
    parser.add_argument(
        "--provider",
        choices=["anthropic", "openai"],
        default=None,
        help="Model provider (default: anthropic, can be set via MCP_BRIDGE_PROVIDER)",
    )
    parser.add_argument("--model", default=None, help="Model identifier (can be set via MCP_BRIDGE_MODEL)")
    parser.add_argument(
        "--max-tokens", type=int, default=None, help="Token budget per model call (default: 1000)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via MCP_BRIDGE_LOG_LEVEL)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> BridgeSettings:
    """Environment settings with command-line overrides applied."""
    settings = BridgeSettings.from_env()
    overrides = {
        "provider": args.provider,
        "model": args.model,
        "max_tokens": args.max_tokens,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        settings = BridgeSettings.model_validate({**settings.model_dump(), **overrides})
    return settings


async def chat_loop(client: MCPBridgeClient) -> None:
    print("\nMCP Client Started!")
    print("Type your queries or 'quit' to exit.")
    while True:
        user_input = (await asyncio.to_thread(input, "\nQuery: ")).strip()
        if user_input.lower() in ["exit", "quit"]:
            break
        if not user_input:
            continue

        result = await client.run_query(user_input)
        if result.ok:
            print("\n" + (result.response or ""))
        else:
            print(f"\nError: {result.error}")


async def run(args: argparse.Namespace, settings: BridgeSettings) -> int:
    async with MCPBridgeClient.from_settings(settings) as client:
        try:
            await client.connect(args.server_script)
        except BridgeError as e:
            logger.error("Failed to start MCP client: %s", e)
            return 1

        if args.query is not None:
            result = await client.run_query(args.query)
            if not result.ok:
                print(f"Error: {result.error}", file=sys.stderr)
                return 1
            print(result.response)
            return 0

        try:
            await chat_loop(client)
        except (EOFError, KeyboardInterrupt):
            pass
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, load settings and run the bridge.

    Returns:
        Process exit code: 0 on success, 1 on startup or query failure.
    """
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
        setup_logging(settings.log_level)
        settings.require_api_key()
    except (BridgeError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
