"""Lease and server configuration tools."""

from kea_mcp.context import get_context
from kea_mcp.models import Lease
from kea_mcp.services import DhcpService
from pydantic import Field
from typing import Annotated, Any


async def list_leases(
    search: Annotated[
        str | None, Field(description='Optional IP, hostname or MAC fragment to filter by')
    ] = None,
) -> list[Lease]:
    """List DHCPv4 leases in the configured subnet.

    When to use this tool:
    - Seeing which devices currently hold dynamic addresses
    - Finding the lease behind an address conflict

    Args:
        search: Optional case-insensitive filter

    Returns:
        Leases with address, MAC, hostname, lifetime and state

    Raises:
        ToolError: CONTROLLER_UNREACHABLE if the Kea Control Agent cannot be reached
    """
    context = get_context()
    async with context.client() as client:
        return await DhcpService(context.settings, client, context.assignments).leases(search)


async def delete_lease(
    ip_address: Annotated[str, Field(description='Leased IPv4 address to release')],
) -> dict[str, Any]:
    """Remove a lease from the Kea lease database.

    The client may simply request the address again; delete the lease after
    the device is gone or before reserving the address for another device.

    Raises:
        ToolError: UPSTREAM_ERROR if Kea has no such lease
    """
    context = get_context()
    async with context.client() as client:
        await DhcpService(context.settings, client, context.assignments).delete_lease(ip_address)
    return {'deleted': ip_address}


async def get_dhcp_config() -> dict[str, Any]:
    """Return the running Kea DHCPv4 configuration (config-get)."""
    context = get_context()
    async with context.client() as client:
        return await DhcpService(context.settings, client, context.assignments).config()
