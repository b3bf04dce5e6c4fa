"""Command-line entry point: ``python -m bounty_board_mcp`` or ``bounty-board-mcp``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from bounty_board_mcp.config import default_config

logger = logging.getLogger("bounty_board_mcp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bounty-board-mcp",
        description="Expose the AI Bounty Board API as MCP tools.",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="stdio (default) for local agents, http to serve POST /mcp",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port")
    parser.add_argument("--log-level", default=None, help="Override BOUNTY_BOARD_MCP_LOG_LEVEL")
    return parser


def _run(args: argparse.Namespace) -> None:
    from bounty_board_mcp.server import configure_logging

    configure_logging(default_config, level=args.log_level)
    if args.transport == "http":
        import uvicorn

        uvicorn.run(
            "bounty_board_mcp.server:app",
            host=args.host,
            port=args.port,
            log_level=(args.log_level or default_config.log_level).lower(),
        )
        return

    from bounty_board_mcp.stdio import run_stdio

    asyncio.run(run_stdio(default_config))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        logger.debug("Bootstrap failed", exc_info=True)
        print(f"Fatal error: {exc!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
