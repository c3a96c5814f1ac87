"""Kea MCP tools organized by domain."""

from kea_mcp.tools import cluster, dhcp, inventory, pool, static_ips

__all__ = [
    'cluster',
    'dhcp',
    'inventory',
    'pool',
    'static_ips',
]
