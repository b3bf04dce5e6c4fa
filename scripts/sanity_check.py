"""Minimal read-only sanity checks against the live bounty board."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from bounty_board_mcp import mcp  # noqa: E402
from bounty_board_mcp.board_api import default_client  # noqa: E402

# Optional bounty id for a detail lookup; falls back to the first open bounty.
SAMPLE_BOUNTY_ID = os.getenv("BOUNTY_BOARD_SAMPLE_ID")


async def main() -> None:
    try:
        print(await mcp.call_tool("get_stats"))
        print()
        listing = await mcp.call_tool("list_bounties", {"status": "open"})
        print(listing)
        print()

        bounty_id = SAMPLE_BOUNTY_ID
        if not bounty_id and listing.startswith("• ["):
            bounty_id = listing[3:].split("]", 1)[0]
        if bounty_id:
            print(await mcp.call_tool("get_bounty", {"id": bounty_id}))
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
