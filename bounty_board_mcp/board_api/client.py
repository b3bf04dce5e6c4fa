"""
Thin HTTP client for the bounty board API.

Every outbound call goes through this module. Failures are raised as
BountyBoardError subclasses so the tool layer can report them to the agent.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx

from bounty_board_mcp.config import BountyBoardConfig, default_config

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}
UNEXPECTED_RESPONSE = "Unexpected response from bounty board."


class BountyBoardError(Exception):
    """Base exception for bounty board failures."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BountyNotFoundError(BountyBoardError):
    """Raised when a bounty id is missing from the current listing."""


class RemoteUnreachableError(BountyBoardError):
    """Raised when the bounty board cannot be reached."""


def _message_field(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _bounty_path(bounty_id: str, action: str) -> str:
    return f"/bounties/{quote(bounty_id, safe='')}/{action}"


class BountyBoardClient:
    """Async client for the bounty board REST API."""

    def __init__(
        self,
        config: BountyBoardConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        client = await self._get_client()
        merged = httpx.Headers(DEFAULT_HEADERS)
        merged.update(headers or {})
        try:
            return await client.request(method, path, json=json_body, headers=merged)
        except httpx.RequestError as exc:
            logger.warning("Bounty board unreachable for %s %s", method, path)
            raise RemoteUnreachableError(f"Bounty board unreachable: {exc}") from exc

    async def fetch_json(self, path: str, *, headers: Optional[Mapping[str, str]] = None) -> Any:
        """GET ``path`` and decode the JSON body."""
        response = await self._send("GET", path, headers=headers)
        if not response.is_success:
            raise BountyBoardError(
                f"API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise BountyBoardError(UNEXPECTED_RESPONSE, status_code=response.status_code) from exc

    async def post_json(
        self, path: str, body: Dict[str, Any], *, failure_message: str
    ) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded object.

        A non-success status raises with the remote ``message`` field when one is
        present, otherwise with ``failure_message``.
        """
        response = await self._send("POST", path, json_body=body)
        try:
            data: Any = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            raise BountyBoardError(
                _message_field(data) or failure_message,
                status_code=response.status_code,
            )
        if not isinstance(data, dict):
            raise BountyBoardError(UNEXPECTED_RESPONSE, status_code=response.status_code)
        return data

    async def fetch_bounties(self) -> List[Any]:
        """Retrieve the full bounty collection."""
        data = await self.fetch_json("/bounties")
        if not isinstance(data, list):
            raise BountyBoardError(UNEXPECTED_RESPONSE)
        return data

    async def fetch_stats(self) -> Dict[str, Any]:
        """Retrieve aggregate board statistics."""
        data = await self.fetch_json("/stats")
        if not isinstance(data, dict):
            raise BountyBoardError(UNEXPECTED_RESPONSE)
        return data

    async def claim(self, bounty_id: str, wallet: str, name: Optional[str] = None) -> Optional[str]:
        """Claim a bounty; returns the remote message, if any."""
        body: Dict[str, Any] = {"wallet": wallet}
        if name is not None:
            body["name"] = name
        data = await self.post_json(
            _bounty_path(bounty_id, "claim"), body, failure_message="Claim failed"
        )
        return _message_field(data)

    async def submit(
        self, bounty_id: str, wallet: str, proof_url: str, description: str
    ) -> Optional[str]:
        """Submit work for a bounty; returns the remote message, if any."""
        body = {"wallet": wallet, "proofUrl": proof_url, "description": description}
        data = await self.post_json(
            _bounty_path(bounty_id, "submit"), body, failure_message="Submission failed"
        )
        return _message_field(data)


default_client = BountyBoardClient()
