"""Tools for reading and changing the active reservation pool."""

from kea_mcp.context import get_context
from kea_mcp.models import PoolConfig, PoolValidation
from kea_mcp.services import PoolService
from kea_mcp.utils.errors import ToolError
from kea_mcp.utils.logging import log_tool_call, log_tool_result
from pydantic import Field
from typing import Annotated, Any


async def get_pool_config() -> PoolConfig:
    """Show the active reservation pool.

    If no pool was ever stored, the RESERVED_POOL environment range (or the
    built-in 192.168.1.2 - 192.168.1.100) is returned; ``source`` tells
    which one is in effect.

    When to use this tool:
    - Before interpreting utilization numbers
    - Checking whether someone changed the pool

    Returns:
        PoolConfig with range, total and source ('store', 'environment', 'default')
    """
    context = get_context()
    return await PoolService(context.settings, context.pools).get_active()


async def set_pool_config(
    start_ip: Annotated[str, Field(description='First address of the pool (e.g., 192.168.1.2)')],
    end_ip: Annotated[str, Field(description='Last address of the pool, same /24 as start_ip')],
    description: Annotated[str | None, Field(description='Operator note')] = None,
) -> PoolConfig:
    """Store a new reservation pool range, replacing the active one.

    The pool size is recomputed from the range. Existing reservations are
    not checked; they may sit inside the pool.

    Common workflow:
    1. Use validate_pool_config() to preview the size
    2. Use set_pool_config() to store it
    3. Use get_ip_utilization() to see the new headroom

    Raises:
        ToolError: VALIDATION_FAILED if an address is invalid, the endpoints
            are in different /24 networks, or end_ip is below start_ip
    """
    call_id = log_tool_call('set_pool_config', {'start_ip': start_ip, 'end_ip': end_ip})

    context = get_context()
    try:
        pool = await PoolService(context.settings, context.pools).set(start_ip, end_ip, description)
    except ToolError as e:
        log_tool_result('set_pool_config', success=False, error=e.message, correlation_id=call_id)
        raise

    log_tool_result('set_pool_config', success=True, result=pool, correlation_id=call_id)
    return pool


async def reset_pool_config() -> dict[str, Any]:
    """Remove the stored pool so the environment or default range applies again."""
    context = get_context()
    service = PoolService(context.settings, context.pools)
    count = await service.reset()
    fallback = await service.get_active()
    return {
        'deleted': count,
        'message': f'Pool configuration reset; using {fallback.source} range {fallback.range}',
    }


async def validate_pool_config(
    start_ip: Annotated[str, Field(description='Candidate first address')],
    end_ip: Annotated[str, Field(description='Candidate last address')],
) -> PoolValidation:
    """Check a candidate pool range without storing it.

    Returns:
        PoolValidation with valid flag, message and pool size
    """
    context = get_context()
    return PoolService(context.settings, context.pools).validate(start_ip, end_ip)
