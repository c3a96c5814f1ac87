"""Shared utilities for Kea MCP server."""

# Import only basic utilities to avoid circular dependencies in tests
from kea_mcp.utils.errors import (
    ConflictError,
    ErrorCodes,
    NoAvailableAddressError,
    NotFoundError,
    ToolError,
    UnreachableError,
    UpstreamError,
    ValidationError,
)
from kea_mcp.utils.logging import configure_logging, get_logger, log_tool_call, log_tool_result


__all__ = [
    'ConflictError',
    'ErrorCodes',
    'NoAvailableAddressError',
    'NotFoundError',
    'ToolError',
    'UnreachableError',
    'UpstreamError',
    'ValidationError',
    'configure_logging',
    'get_logger',
    'log_tool_call',
    'log_tool_result',
]
