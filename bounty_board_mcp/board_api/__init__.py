"""HTTP client wrappers for the bounty board API."""

from .client import (
    BountyBoardClient,
    BountyBoardError,
    BountyNotFoundError,
    RemoteUnreachableError,
    default_client,
)

__all__ = [
    "BountyBoardClient",
    "BountyBoardError",
    "BountyNotFoundError",
    "RemoteUnreachableError",
    "default_client",
]
