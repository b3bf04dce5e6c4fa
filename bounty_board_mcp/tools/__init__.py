"""LLM-facing bounty operations."""

from .bounties import claim_bounty, get_bounty, get_stats, list_bounties, submit_work

__all__ = [
    "list_bounties",
    "get_bounty",
    "get_stats",
    "claim_bounty",
    "submit_work",
]
