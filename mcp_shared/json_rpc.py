"""
JSON-RPC 2.0 Transport Utilities — Python

Low-level JSON-RPC message handling for MCP server communication.
Used by mcp_base.py; typically not imported directly by tool implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

RequestId = Union[str, int, None]


@dataclass
class JsonRpcRequest:
    """A JSON-RPC 2.0 request (or notification when ``id`` is None)."""

    jsonrpc: str
    id: RequestId
    method: str
    params: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, msg: dict[str, Any]) -> JsonRpcRequest:
        return cls(
            jsonrpc=msg.get("jsonrpc", "2.0"),
            id=msg.get("id"),
            method=msg["method"],
            params=msg.get("params"),
        )


@dataclass
class JsonRpcResponse:
    """A JSON-RPC 2.0 response."""

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: Any = None
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return d


def success_response(request_id: RequestId, result: Any) -> dict[str, Any]:
    """Create a JSON-RPC success response."""
    return JsonRpcResponse(id=request_id, result=result).to_dict()


def error_response(
    request_id: RequestId,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    """Create a JSON-RPC error response."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return JsonRpcResponse(id=request_id, error=error).to_dict()


def is_valid_request(msg: Any) -> bool:
    """
    Validate that a decoded JSON value is a usable JSON-RPC 2.0 request.

    The ``jsonrpc`` member is not enforced; clients that omit it are still
    served. ``id`` may be absent (notification), a string, an integer or null.
    """
    if not isinstance(msg, dict) or not isinstance(msg.get("method"), str):
        return False
    request_id = msg.get("id")
    if request_id is not None and (
        isinstance(request_id, bool) or not isinstance(request_id, (str, int))
    ):
        return False
    params = msg.get("params")
    return params is None or isinstance(params, dict)
