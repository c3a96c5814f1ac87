"""Error handling utilities for Kea MCP tools."""

from typing import Any


class ToolError(Exception):
    """Structured error for MCP tools."""

    def __init__(
        self,
        message: str,
        error_code: str,
        suggestion: str | None = None,
        related_tools: list[str] | None = None,
    ):
        """Initialize tool error with structured context.

        Args:
            message: Human-readable error description
            error_code: Structured error code (e.g., 'ADDRESS_CONFLICT')
            suggestion: Optional recovery suggestion for the user
            related_tools: Optional list of tools that might help resolve the issue
        """
        self.message = message
        self.error_code = error_code
        self.suggestion = suggestion
        self.related_tools = related_tools or []
        super().__init__(self._format())

    def _format(self) -> str:
        """Format error message with structured information."""
        parts = [f'[{self.error_code}] {self.message}']

        if self.suggestion:
            parts.append(f'💡 Suggestion: {self.suggestion}')

        if self.related_tools:
            parts.append(f'🔧 Related tools: {", ".join(self.related_tools)}')

        return '\n'.join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'suggestion': self.suggestion or '',
            'related_tools': self.related_tools,
        }


class ValidationError(ToolError):
    """Malformed input rejected before any external call."""

    def __init__(self, message: str, details: list[str] | None = None, **kwargs: Any):
        self.details = details or []
        if self.details:
            message = f'{message}: {"; ".join(self.details)}'
        super().__init__(message=message, error_code=ErrorCodes.VALIDATION_FAILED, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data['details'] = self.details
        return data


class ConflictError(ToolError):
    """Address or identifier already claimed by another record."""

    def __init__(
        self,
        message: str,
        existing: Any = None,
        error_code: str | None = None,
        **kwargs: Any,
    ):
        self.existing = existing
        super().__init__(
            message=message,
            error_code=error_code or ErrorCodes.ADDRESS_CONFLICT,
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if hasattr(self.existing, 'model_dump'):
            data['existing'] = self.existing.model_dump(mode='json')
        else:
            data['existing'] = self.existing
        return data


class UpstreamError(ToolError):
    """Kea control endpoint answered with a nonzero result code."""

    def __init__(self, command: str, result: int, text: str, **kwargs: Any):
        self.command = command
        self.result = result
        self.text = text
        kwargs.setdefault('suggestion', 'Check the Kea server logs for the rejected command')
        super().__init__(
            message=f'Kea command {command} failed (result {result}): {text}',
            error_code=ErrorCodes.UPSTREAM_ERROR,
            **kwargs,
        )


class UnreachableError(ToolError):
    """A control endpoint request failed in transport or timed out."""

    def __init__(self, message: str, timed_out: bool = False, **kwargs: Any):
        self.timed_out = timed_out
        kwargs.setdefault('suggestion', 'Check network connectivity and Kea Control Agent status')
        super().__init__(
            message=message,
            error_code=ErrorCodes.TIMEOUT if timed_out else ErrorCodes.CONTROLLER_UNREACHABLE,
            **kwargs,
        )


class NotFoundError(ToolError):
    """Requested record does not exist."""

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message=message, error_code=ErrorCodes.NOT_FOUND, **kwargs)


class NoAvailableAddressError(ToolError):
    """Every address in the scanned range is occupied."""

    def __init__(self, start_ip: str, end_ip: str, **kwargs: Any):
        self.start_ip = start_ip
        self.end_ip = end_ip
        kwargs.setdefault('suggestion', 'Widen the reservation pool or release unused reservations')
        kwargs.setdefault('related_tools', ['get_ip_utilization', 'set_pool_config'])
        super().__init__(
            message=f'No available addresses between {start_ip} and {end_ip}',
            error_code=ErrorCodes.NO_AVAILABLE_ADDRESS,
            **kwargs,
        )


# Common error codes for consistency
class ErrorCodes:
    """Standard error codes for Kea MCP tools."""

    # Input errors
    VALIDATION_FAILED = 'VALIDATION_FAILED'
    INVALID_IP = 'INVALID_IP'
    INVALID_MAC = 'INVALID_MAC'
    CONFIG_INVALID = 'CONFIG_INVALID'

    # Inventory errors
    ADDRESS_CONFLICT = 'ADDRESS_CONFLICT'
    IDENTIFIER_CONFLICT = 'IDENTIFIER_CONFLICT'
    NOT_FOUND = 'NOT_FOUND'
    NO_AVAILABLE_ADDRESS = 'NO_AVAILABLE_ADDRESS'

    # Control endpoint errors
    UPSTREAM_ERROR = 'UPSTREAM_ERROR'
    CONTROLLER_UNREACHABLE = 'CONTROLLER_UNREACHABLE'
    TIMEOUT = 'TIMEOUT'
    API_ERROR = 'API_ERROR'
