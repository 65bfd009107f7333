"""
MCP Server Base Classes — Python

Shared foundation for the content tool server.
Implements JSON-RPC 2.0 over stdio transport and tool registration.

Usage:
    from mcp_shared import MCPServer, MCPTool, MCPError
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Generic, TextIO, TypeVar

from pydantic import BaseModel, ValidationError

from .json_rpc import (
    JsonRpcRequest,
    RequestId,
    error_response,
    is_valid_request,
    success_response,
)

# ─── Type Variables ──────────────────────────────────────────────────────────

TParams = TypeVar("TParams", bound=BaseModel)

PROTOCOL_VERSION = "2024-11-05"

# Longest accepted input line; larger lines are answered with a parse error.
MAX_LINE_BYTES = 16 * 1024 * 1024

# Lifecycle notifications never receive a response, even when an id is sent.
NOTIFICATION_METHODS: frozenset[str] = frozenset(
    {"initialized", "notifications/initialized"}
)

_logger = logging.getLogger("content.mcp")

# ─── Error Types ─────────────────────────────────────────────────────────────


class MCPError(Exception):
    """Protocol-level error, reported to the peer as a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


class ErrorCodes:
    """Standard JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ─── Method Params ───────────────────────────────────────────────────────────


class ToolCallParams(BaseModel):
    """Params of a tools/call request."""

    name: str
    arguments: dict[str, Any] | None = None


# ─── Tool Base Class ─────────────────────────────────────────────────────────


class MCPTool(ABC, Generic[TParams]):
    """
    Abstract base class for MCP tools.

    Every tool must define:
    - name: as advertised by tools/list (e.g., 'read_recipe')
    - description: for the LLM
    - Params type: pydantic BaseModel for argument decoding
    - execute(): the implementation, returning the text shown to the caller
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def execute(self, params: TParams) -> str:
        """Execute the tool with validated parameters."""
        ...

    def get_params_model(self) -> type[BaseModel]:
        """Get the Pydantic model class for params validation."""
        # Extract from Generic type args, walking up for intermediate subclasses
        for cls in type(self).__mro__:
            for base in cls.__dict__.get("__orig_bases__", ()):
                args = getattr(base, "__args__", ())
                if args and isinstance(args[0], type) and issubclass(args[0], BaseModel):
                    return args[0]
        raise TypeError(f"Tool {self.name} must specify Generic params type")

    def get_input_schema(self) -> dict[str, Any]:
        """Generate JSON Schema from the Pydantic params model."""
        model = self.get_params_model()
        return model.model_json_schema()

    def to_definition(self) -> dict[str, Any]:
        """Generate the tool definition returned by tools/list."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.get_input_schema(),
        }


# ─── MCP Server ──────────────────────────────────────────────────────────────


class MCPServer:
    """
    Base MCP Server.

    Registers tools, handles JSON-RPC over stdio, validates params,
    and dispatches tool calls.

    Usage:
        server = MCPServer(
            name="content",
            version="1.0.0",
            tools=[ListContent(recipes), ReadContent(recipes)],
        )
        server.start()
    """

    def __init__(
        self,
        name: str,
        version: str,
        tools: list[MCPTool[Any]],
        instructions: str | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.instructions = instructions
        self.tools: dict[str, MCPTool[Any]] = {}

        for tool in tools:
            if tool.name in self.tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self.tools[tool.name] = tool

    def start(self) -> None:
        """Start the JSON-RPC listener on stdio (blocking)."""
        asyncio.run(self._run())

    async def _run(self) -> None:
        """Connect stdin to a stream reader and serve until it closes."""
        reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
        protocol = asyncio.StreamReaderProtocol(reader)
        await asyncio.get_running_loop().connect_read_pipe(lambda: protocol, sys.stdin)
        await self.serve(reader, sys.stdout)

    async def serve(self, reader: asyncio.StreamReader, output: TextIO) -> None:
        """
        Read request lines until EOF and answer each one.

        Every line is handled in its own task, so responses may be written in
        a different order than the requests arrived; the ``id`` correlates
        them. Writes are serialized so a response is always one whole line.
        """
        write_lock = asyncio.Lock()
        pending: set[asyncio.Task[None]] = set()

        async def emit(response: dict[str, Any]) -> None:
            async with write_lock:
                output.write(json.dumps(response) + "\n")
                output.flush()

        async def respond(line_str: str) -> None:
            response = await self.handle_line(line_str)
            if response is not None:
                await emit(response)

        while True:
            try:
                line = await reader.readline()
            except ValueError as e:
                # The reader drops the oversized line; its id cannot be read.
                _logger.warning("Discarding oversized input line: %s", e)
                await emit(
                    error_response(
                        None,
                        ErrorCodes.PARSE_ERROR,
                        "Parse error",
                        {"error": f"Input line too long: {e}"},
                    )
                )
                continue
            if not line:
                break  # stdin closed

            line_str = line.decode("utf-8", errors="replace").strip()
            if not line_str:
                continue

            task = asyncio.create_task(respond(line_str))
            pending.add(task)
            task.add_done_callback(pending.discard)

        if pending:
            await asyncio.gather(*pending)

    async def handle_line(self, line: str) -> dict[str, Any] | None:
        """Decode one input line and return its response (None for notifications)."""
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            _logger.warning("Parse error: %s", e)
            return error_response(None, ErrorCodes.PARSE_ERROR, "Parse error")

        if not is_valid_request(message):
            return error_response(
                _recover_id(message), ErrorCodes.INVALID_REQUEST, "Invalid Request"
            )

        return await self._handle_request(JsonRpcRequest.from_dict(message))

    def _build_init_result(self) -> dict[str, Any]:
        """Build the initialize result payload."""
        result: dict[str, Any] = {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": True}},
            "serverInfo": {"name": self.name, "version": self.version},
        }
        if self.instructions is not None:
            result["instructions"] = self.instructions
        return result

    async def _handle_request(self, request: JsonRpcRequest) -> dict[str, Any] | None:
        """Dispatch a JSON-RPC request."""
        method = request.method

        if method in NOTIFICATION_METHODS:
            return None

        try:
            if method == "initialize":
                result = self._build_init_result()
            elif method == "ping":
                result = {}
            elif method == "tools/list":
                result = self._handle_tool_list()
            elif method == "tools/call":
                result = await self._handle_tool_call(request.params or {})
            else:
                raise MCPError(
                    ErrorCodes.METHOD_NOT_FOUND,
                    "Method not found",
                    {"method": method},
                )
        except MCPError as e:
            return error_response(request.id, e.code, str(e), e.data)
        except Exception as e:
            _logger.exception("Unhandled error while dispatching %s", method)
            return error_response(
                request.id,
                ErrorCodes.INTERNAL_ERROR,
                "Internal error",
                {"error": str(e)},
            )

        return success_response(request.id, result)

    async def _handle_tool_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle a tools/call request."""
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as e:
            raise MCPError(
                ErrorCodes.INVALID_PARAMS, f"Invalid parameters: {e}"
            ) from e

        tool = self.tools.get(call.name)
        if tool is None:
            raise MCPError(
                ErrorCodes.INTERNAL_ERROR,
                f"Tool not found: {call.name}",
                {"tool": call.name},
            )

        # Validate arguments
        try:
            validated_params = tool.get_params_model().model_validate(call.arguments or {})
        except ValidationError as e:
            raise MCPError(
                ErrorCodes.INVALID_PARAMS, f"Invalid parameters: {e}"
            ) from e

        # Execute tool
        try:
            text = await tool.execute(validated_params)
        except Exception as e:
            _logger.warning("Tool %s failed: %s", call.name, e)
            return {
                "content": [{"type": "text", "text": f"Error: {e}"}],
                "isError": True,
            }

        return {"content": [{"type": "text", "text": text}]}

    def _handle_tool_list(self) -> dict[str, Any]:
        """Handle a tools/list request."""
        return {"tools": [tool.to_definition() for tool in self.tools.values()]}


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _recover_id(message: Any) -> RequestId:
    """Best-effort id of a malformed request, or None if unreadable."""
    if isinstance(message, dict):
        request_id = message.get("id")
        if isinstance(request_id, (str, int)) and not isinstance(request_id, bool):
            return request_id
    return None
