"""Transient records built from bounty board API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def _optional_str_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True, slots=True)
class Bounty:
    id: str
    title: str
    description: str
    reward: str
    status: str
    tags: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    creator: Optional[str] = None
    claimed_by: Optional[str] = None
    deadline: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Any) -> "Bounty":
        """
        Build a bounty from one entry of ``GET /bounties``.

        Optional string fields that are missing, null, or empty come back as
        None. Raises ValueError when the entry is not a JSON object.
        """
        if not isinstance(raw, dict):
            raise ValueError("bounty entry is not an object")
        return cls(
            id=str(raw.get("id", "")),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            reward=str(raw.get("reward") if raw.get("reward") is not None else "0"),
            status=str(raw.get("status") or ""),
            tags=_optional_str_list(raw.get("tags")),
            requirements=_optional_str_list(raw.get("requirements")),
            creator=_optional_str(raw.get("creator")),
            claimed_by=_optional_str(raw.get("claimedBy")),
            deadline=_optional_str(raw.get("deadline")),
        )


@dataclass(frozen=True, slots=True)
class BoardStats:
    total_bounties: int
    open_bounties: int
    completed_bounties: int
    total_rewards: str = "0"

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "BoardStats":
        total_rewards = raw.get("totalRewards")
        return cls(
            total_bounties=_to_int(raw.get("totalBounties")),
            open_bounties=_to_int(raw.get("openBounties")),
            completed_bounties=_to_int(raw.get("completedBounties")),
            total_rewards=str(total_rewards) if total_rewards not in (None, "") else "0",
        )
