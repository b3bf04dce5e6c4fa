"""Logging setup and a FastAPI app exposing the MCP gateway over HTTP."""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from bounty_board_mcp import mcp
from bounty_board_mcp.board_api import default_client
from bounty_board_mcp.config import BountyBoardConfig, MCP_SERVER_VERSION, default_config
from bounty_board_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)
HEALTH_STATUS = {"status": "ok"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "error"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: Optional[BountyBoardConfig] = None, *, level: Optional[str] = None) -> None:
    """Send all logs to stderr; stdout is reserved for protocol messages."""
    config = config or default_config
    handler = logging.StreamHandler(sys.stderr)
    if config.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    level_name = (level or config.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        handlers=[handler],
        force=True,
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await default_client.aclose()


app = FastAPI(
    title="Bounty Board MCP Server",
    description="Bounty board tool surface for LLM agents.",
    version=MCP_SERVER_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """JSON-RPC gateway sharing the stdio transport's dispatcher."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(status_code=400, content=mcp.parse_error_payload())

    payload = await mcp.handle_message(body)
    if payload is None:
        # Notifications do not get a JSON-RPC response body.
        return Response(status_code=204)
    status_code = 400 if payload.get("error", {}).get("code") == mcp.INVALID_REQUEST else 200
    return JSONResponse(status_code=status_code, content=payload)
