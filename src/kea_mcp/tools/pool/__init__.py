"""Reservation pool configuration tools."""

from kea_mcp.tools.pool.config import (
    get_pool_config,
    reset_pool_config,
    set_pool_config,
    validate_pool_config,
)

__all__ = [
    'get_pool_config',
    'reset_pool_config',
    'set_pool_config',
    'validate_pool_config',
]
