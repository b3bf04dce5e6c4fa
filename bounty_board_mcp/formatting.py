"""Render bounty records as text blocks for the calling agent."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Sequence

from bounty_board_mcp.models import BoardStats, Bounty

# USDC carries 6 decimal places.
MINOR_UNITS_PER_TOKEN = Decimal(1_000_000)
CENTS = Decimal("0.01")
NO_RESULTS = "No bounties found."


def format_reward(raw: str) -> str:
    """Convert a minor-unit amount (e.g. ``"30000000"``) to ``"$30.00 USDC"``."""
    try:
        amount = Decimal(str(raw).strip()) / MINOR_UNITS_PER_TOKEN
        if not amount.is_finite():
            return "$? USDC"
        return f"${amount.quantize(CENTS, rounding=ROUND_HALF_UP)} USDC"
    except InvalidOperation:
        return "$? USDC"


def format_bounty(bounty: Bounty) -> str:
    lines: List[str] = [
        f"**{bounty.title}** (ID: {bounty.id})",
        f"Status: {bounty.status.upper()} | Reward: {format_reward(bounty.reward)}",
        f"Tags: {', '.join(bounty.tags) if bounty.tags else 'none'}",
        "",
        bounty.description,
    ]
    if bounty.requirements is not None and len(bounty.requirements) > 0:
        lines.extend(["", "Requirements:"])
        lines.extend(f"- {requirement}" for requirement in bounty.requirements)
    if bounty.claimed_by is not None:
        lines.extend(["", f"Claimed by: {bounty.claimed_by}"])
    if bounty.deadline is not None:
        lines.append(f"Deadline: {bounty.deadline}")
    return "\n".join(lines)


def format_bounty_list(bounties: Sequence[Bounty]) -> str:
    if not bounties:
        return NO_RESULTS
    return "\n".join(
        f"• [{bounty.id}] {bounty.title} - {format_reward(bounty.reward)} ({bounty.status})"
        for bounty in bounties
    )


def format_stats(stats: BoardStats) -> str:
    return "\n".join(
        [
            "**AI Bounty Board Statistics**",
            "",
            f"Total Bounties: {stats.total_bounties}",
            f"Open: {stats.open_bounties}",
            f"Completed: {stats.completed_bounties}",
            f"Total Rewards: {format_reward(stats.total_rewards)}",
        ]
    )
