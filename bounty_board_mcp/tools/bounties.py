"""Bounty operations backed by the remote board."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from bounty_board_mcp.board_api import BountyBoardError, BountyNotFoundError, default_client
from bounty_board_mcp.board_api.client import UNEXPECTED_RESPONSE
from bounty_board_mcp.models import BoardStats, Bounty

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"
CLAIM_SUCCESS_MESSAGE = "Bounty claimed successfully!"
SUBMIT_SUCCESS_MESSAGE = "Work submitted successfully!"


def _parse_bounties(raw_bounties: List[Any]) -> List[Bounty]:
    try:
        return [Bounty.from_api(raw) for raw in raw_bounties]
    except ValueError as exc:
        raise BountyBoardError(UNEXPECTED_RESPONSE) from exc


async def list_bounties(
    status: Optional[str] = None,
    tag: Optional[str] = None,
    *,
    client=default_client,
) -> List[Bounty]:
    """
    List bounties, optionally narrowed by status and tag.

    Filtering happens locally since the API has no query parameters. A status
    of ``"all"`` disables the status filter. Remote order is preserved.
    """
    bounties = _parse_bounties(await client.fetch_bounties())
    if status is not None and status != ALL_STATUSES:
        bounties = [bounty for bounty in bounties if bounty.status == status]
    if tag is not None:
        bounties = [bounty for bounty in bounties if bounty.tags is not None and tag in bounty.tags]
    logger.debug("list_bounties status=%s tag=%s matched=%d", status, tag, len(bounties))
    return bounties


async def get_bounty(bounty_id: str, *, client=default_client) -> Bounty:
    """Return the first bounty with ``bounty_id``; raise BountyNotFoundError otherwise."""
    for bounty in _parse_bounties(await client.fetch_bounties()):
        if bounty.id == bounty_id:
            return bounty
    raise BountyNotFoundError(f"Bounty {bounty_id} not found")


async def get_stats(*, client=default_client) -> BoardStats:
    return BoardStats.from_api(await client.fetch_stats())


async def claim_bounty(
    bounty_id: str,
    wallet: str,
    name: Optional[str] = None,
    *,
    client=default_client,
) -> str:
    """Claim a bounty for ``wallet`` and return the board's confirmation."""
    message = await client.claim(bounty_id, wallet, name)
    logger.info("Claimed bounty %s", bounty_id)
    return message if message is not None else CLAIM_SUCCESS_MESSAGE


async def submit_work(
    bounty_id: str,
    wallet: str,
    proof_url: str,
    description: str,
    *,
    client=default_client,
) -> str:
    """Submit proof of work for a claimed bounty."""
    message = await client.submit(bounty_id, wallet, proof_url, description)
    logger.info("Submitted work for bounty %s", bounty_id)
    return message if message is not None else SUBMIT_SUCCESS_MESSAGE
