"""Inventory tools for utilization, allocation and search."""

from kea_mcp.tools.inventory.allocation import get_next_available_ip, search_inventory
from kea_mcp.tools.inventory.utilization import get_ip_utilization, get_lease_statistics

__all__ = [
    'get_ip_utilization',
    'get_lease_statistics',
    'get_next_available_ip',
    'search_inventory',
]
