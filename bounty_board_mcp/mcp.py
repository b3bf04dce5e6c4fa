"""
JSON-RPC surface for MCP tooling.

Maps tool names to bounty operations, validates arguments against each tool's
declared shape before anything reaches the remote board, and renders results
as single text content blocks. The stdio transport hands ``call_tool`` to the
MCP SDK; the HTTP gateway dispatches raw JSON-RPC through ``handle_message``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Type

from mcp.shared.version import SUPPORTED_PROTOCOL_VERSIONS
from mcp.types import LATEST_PROTOCOL_VERSION
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bounty_board_mcp import formatting
from bounty_board_mcp.board_api import BountyBoardClient, BountyBoardError, default_client
from bounty_board_mcp.config import MCP_SERVER_NAME, MCP_SERVER_VERSION
from bounty_board_mcp.metrics import default_metrics
from bounty_board_mcp.tools import bounties

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class UnknownToolError(LookupError):
    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidToolArguments(ValueError):
    """Raised when tool arguments do not match the declared shape."""

    def __init__(self, tool_name: str, problems: List[Dict[str, str]]) -> None:
        summary = "; ".join(f"{p['field']}: {p['message']}" for p in problems)
        super().__init__(f"Invalid arguments for tool {tool_name}: {summary}")
        self.tool_name = tool_name
        self.problems = problems


class _Arguments(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class ListBountiesArguments(_Arguments):
    status: Optional[Literal["open", "claimed", "completed", "all"]] = None
    tag: Optional[str] = None


class GetBountyArguments(_Arguments):
    id: str


class GetStatsArguments(_Arguments):
    pass


class ClaimBountyArguments(_Arguments):
    id: str
    wallet: str
    name: Optional[str] = None


class SubmitWorkArguments(_Arguments):
    id: str
    wallet: str
    proof_url: str = Field(alias="proofUrl")
    description: str


ToolHandler = Callable[[Any, BountyBoardClient], Awaitable[str]]


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    arguments: Type[_Arguments]
    handler: ToolHandler


async def _list_bounties(args: ListBountiesArguments, client: BountyBoardClient) -> str:
    found = await bounties.list_bounties(args.status, args.tag, client=client)
    return formatting.format_bounty_list(found)


async def _get_bounty(args: GetBountyArguments, client: BountyBoardClient) -> str:
    return formatting.format_bounty(await bounties.get_bounty(args.id, client=client))


async def _get_stats(_args: GetStatsArguments, client: BountyBoardClient) -> str:
    return formatting.format_stats(await bounties.get_stats(client=client))


async def _claim_bounty(args: ClaimBountyArguments, client: BountyBoardClient) -> str:
    return await bounties.claim_bounty(args.id, args.wallet, args.name, client=client)


async def _submit_work(args: SubmitWorkArguments, client: BountyBoardClient) -> str:
    return await bounties.submit_work(
        args.id, args.wallet, args.proof_url, args.description, client=client
    )


TOOL_REGISTRY: Dict[str, ToolDefinition] = {
    "list_bounties": ToolDefinition(
        name="list_bounties",
        description=(
            "List all bounties from the AI Bounty Board. "
            "Can filter by status (open/claimed/completed) and tag."
        ),
        params={"status": "string (optional)", "tag": "string (optional)"},
        input_schema={
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Filter by status",
                    "enum": ["open", "claimed", "completed", "all"],
                },
                "tag": {
                    "type": "string",
                    "description": "Filter by tag (e.g., 'coding', 'frontend')",
                },
            },
            "required": [],
            "additionalProperties": False,
        },
        arguments=ListBountiesArguments,
        handler=_list_bounties,
    ),
    "get_bounty": ToolDefinition(
        name="get_bounty",
        description="Get detailed information about a specific bounty by its ID.",
        params={"id": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The bounty ID (e.g., '24')"},
            },
            "required": ["id"],
            "additionalProperties": False,
        },
        arguments=GetBountyArguments,
        handler=_get_bounty,
    ),
    "get_stats": ToolDefinition(
        name="get_stats",
        description=(
            "Get platform statistics including total bounties, open count, "
            "completed count, and total rewards."
        ),
        params={},
        input_schema={
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": False,
        },
        arguments=GetStatsArguments,
        handler=_get_stats,
    ),
    "claim_bounty": ToolDefinition(
        name="claim_bounty",
        description=(
            "Claim a bounty to work on it. "
            "Requires the bounty ID and your Ethereum wallet address."
        ),
        params={
            "id": "string (required)",
            "wallet": "string (required)",
            "name": "string (optional)",
        },
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The bounty ID to claim"},
                "wallet": {"type": "string", "description": "Your Ethereum wallet address (0x...)"},
                "name": {"type": "string", "description": "Your name or handle"},
            },
            "required": ["id", "wallet"],
            "additionalProperties": False,
        },
        arguments=ClaimBountyArguments,
        handler=_claim_bounty,
    ),
    "submit_work": ToolDefinition(
        name="submit_work",
        description=(
            "Submit completed work for a bounty. Requires proof URL "
            "(usually GitHub) and description of what was built."
        ),
        params={
            "id": "string (required)",
            "wallet": "string (required)",
            "proofUrl": "string (required)",
            "description": "string (required)",
        },
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The bounty ID"},
                "wallet": {
                    "type": "string",
                    "description": "Your Ethereum wallet address (same one used to claim)",
                },
                "proofUrl": {
                    "type": "string",
                    "description": "URL to your work (e.g., GitHub repository)",
                },
                "description": {"type": "string", "description": "Description of what you built"},
            },
            "required": ["id", "wallet", "proofUrl", "description"],
            "additionalProperties": False,
        },
        arguments=SubmitWorkArguments,
        handler=_submit_work,
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


def validate_arguments(tool: ToolDefinition, params: Dict[str, Any]) -> _Arguments:
    try:
        return tool.arguments.model_validate(params)
    except ValidationError as exc:
        problems = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "(arguments)",
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        raise InvalidToolArguments(tool.name, problems) from exc


async def call_tool(
    tool_name: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    client: Optional[BountyBoardClient] = None,
) -> str:
    """
    Dispatch to a tool by name and return its text output.

    Raises UnknownToolError or InvalidToolArguments before any remote call is
    made. Errors from the operation itself propagate unchanged.
    """
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        raise UnknownToolError(tool_name)
    arguments = validate_arguments(tool, params or {})

    try:
        text = await tool.handler(arguments, client or default_client)
    except Exception as exc:
        logger.warning(
            "tool=%s outcome=error error=%s",
            tool_name,
            exc,
            extra={"tool": tool_name, "error": str(exc)},
        )
        default_metrics.record_tool(tool_name, success=False, error=exc)
        raise
    logger.info("tool=%s outcome=success", tool_name, extra={"tool": tool_name})
    default_metrics.record_tool(tool_name, success=True)
    return text


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(
    rpc_id: Any, code: int, message: str, data: Any = None
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": rpc_id, "error": error}


def parse_error_payload() -> Dict[str, Any]:
    return _jsonrpc_error_payload(None, PARSE_ERROR, "Parse error")


def _text_result(text: str, *, is_error: bool = False) -> Dict[str, Any]:
    result: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


async def _handle_tool_call(
    rpc_id: Any, params: Dict[str, Any], client: Optional[BountyBoardClient]
) -> Dict[str, Any]:
    tool_name = params.get("name") or params.get("tool")
    tool_params = params.get("arguments")
    if tool_params is None:
        tool_params = params.get("params") or {}
    if not isinstance(tool_name, str) or not tool_name.strip():
        return _jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params")
    if not isinstance(tool_params, dict):
        return _jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params")

    try:
        text = await call_tool(tool_name, tool_params, client=client)
    except UnknownToolError as exc:
        return _jsonrpc_error_payload(rpc_id, INVALID_PARAMS, str(exc))
    except InvalidToolArguments as exc:
        logger.info("tool=%s outcome=invalid_arguments", tool_name, extra={"tool": tool_name})
        return _jsonrpc_error_payload(rpc_id, INVALID_PARAMS, str(exc), data=exc.problems)
    except BountyBoardError as exc:
        # Reported in-band so the agent can decide whether to retry.
        return _jsonrpc_success_payload(rpc_id, _text_result(exc.message, is_error=True))
    except Exception as exc:
        logger.exception("Unexpected error calling tool %s", tool_name, extra={"tool": tool_name})
        return _jsonrpc_success_payload(
            rpc_id, _text_result(f"Unexpected error while calling {tool_name}: {exc}", is_error=True)
        )
    return _jsonrpc_success_payload(rpc_id, _text_result(text))


async def handle_message(
    body: Any, *, client: Optional[BountyBoardClient] = None
) -> Optional[Dict[str, Any]]:
    """
    Handle one decoded JSON-RPC message.

    Supported methods:
      - initialize
      - ping
      - tools/list (alias list_tools)
      - tools/call (alias call_tool)

    Returns the response payload, or None for notifications and for responses
    the client sends back.
    """
    default_metrics.incr_message()
    if not isinstance(body, dict):
        return _jsonrpc_error_payload(None, INVALID_REQUEST, "Invalid request")

    if "method" not in body and ("result" in body or "error" in body):
        # Responses to our own requests; JSON-RPC never answers these.
        logger.debug("mcp response received id=%s", body.get("id"))
        return None

    method = body.get("method")
    rpc_id = body.get("id")
    if not isinstance(method, str) or not method:
        return _jsonrpc_error_payload(rpc_id, INVALID_REQUEST, "Invalid request")

    if "id" not in body or method.startswith("notifications/"):
        logger.debug("mcp notification received method=%s", method)
        return None

    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return _jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params")

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if protocol_version not in SUPPORTED_PROTOCOL_VERSIONS:
            protocol_version = LATEST_PROTOCOL_VERSION
        logger.debug("mcp initialize requested protocol=%s", protocol_version)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return _jsonrpc_success_payload(rpc_id, result)

    if method == "ping":
        return _jsonrpc_success_payload(rpc_id, {})

    if method in ("list_tools", "tools/list"):
        return _jsonrpc_success_payload(rpc_id, {"tools": list_tools()})

    if method in ("call_tool", "tools/call"):
        return await _handle_tool_call(rpc_id, params, client)

    return _jsonrpc_error_payload(rpc_id, METHOD_NOT_FOUND, "Method not found")
