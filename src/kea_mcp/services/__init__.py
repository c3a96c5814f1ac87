"""Services that load inventories and apply the analysis functions."""

from kea_mcp.services.dhcp import DhcpService
from kea_mcp.services.inventory import InventoryService
from kea_mcp.services.pool import PoolService, pool_range_errors
from kea_mcp.services.static_ips import StaticIPService


__all__ = [
    'DhcpService',
    'InventoryService',
    'PoolService',
    'StaticIPService',
    'pool_range_errors',
]
