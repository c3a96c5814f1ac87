"""
Kea DHCP MCP server package.
Address inventory reconciliation, pool allocation and HA health for Kea DHCPv4.
"""

__version__ = "0.1.0"
