import logging
import os
import sys

import httpx
import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from bounty_board_mcp.board_api.client import BountyBoardClient  # noqa: E402
from bounty_board_mcp.config import BountyBoardConfig  # noqa: E402
from bounty_board_mcp.metrics import default_metrics  # noqa: E402

TEST_BASE_URL = "https://board.test"

SAMPLE_BOUNTIES = [
    {
        "id": "1",
        "title": "Build a landing page",
        "description": "Static site for the board.",
        "reward": "30000000",
        "status": "open",
        "tags": ["frontend", "coding"],
    },
    {
        "id": "2",
        "title": "Write docs",
        "description": "Document the API.",
        "reward": "5000000",
        "status": "completed",
        "tags": ["docs"],
        "claimedBy": "0xabc",
    },
    {
        "id": "3",
        "title": "Fix CLI bug",
        "description": "Crash on empty input.",
        "reward": "12500000",
        "status": "open",
        "tags": ["coding"],
    },
]


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_board_client():
    """Build a BountyBoardClient whose HTTP traffic goes to ``handler``."""

    def _make(handler) -> BountyBoardClient:
        async_client = httpx.AsyncClient(
            base_url=TEST_BASE_URL, transport=httpx.MockTransport(handler)
        )
        return BountyBoardClient(BountyBoardConfig(base_url=TEST_BASE_URL), async_client=async_client)

    return _make


@pytest.fixture
def listing_client(make_board_client):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/bounties":
            return httpx.Response(200, json=SAMPLE_BOUNTIES)
        return httpx.Response(404, text="not here")

    return make_board_client(handler)
