"""Shared MCP base classes for Python servers."""

from .mcp_base import ErrorCodes, MCPError, MCPServer, MCPTool

__all__ = ["MCPServer", "MCPTool", "MCPError", "ErrorCodes"]
