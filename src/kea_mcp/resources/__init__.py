"""MCP resources for the Kea server."""

from kea_mcp.resources.persona import DHCP_ADMIN_PERSONA

__all__ = ['DHCP_ADMIN_PERSONA']
