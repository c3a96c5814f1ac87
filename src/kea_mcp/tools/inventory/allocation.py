"""Next free address and cross-inventory search tools."""

from kea_mcp.context import get_context
from kea_mcp.models import InventoryMatch, NextAvailableAddress
from kea_mcp.services import InventoryService
from pydantic import Field
from typing import Annotated


async def get_next_available_ip() -> NextAvailableAddress:
    """Find the lowest free address in the reservation pool.

    An address counts as taken if it holds an active lease, a DHCP
    reservation or a static assignment. The same inventories always yield
    the same answer.

    When to use this tool:
    - Picking an address for a new static IP or reservation
    - Checking whether the pool has any room left

    Common workflow:
    1. Use get_next_available_ip() to get a candidate address
    2. Use add_static_ip() or add_reservation() with that address

    Returns:
        NextAvailableAddress with the address, subnet and scanned range

    Raises:
        ToolError: NO_AVAILABLE_ADDRESS if every address in the pool is taken
        ToolError: CONTROLLER_UNREACHABLE if leases or reservations cannot be read
    """
    context = get_context()
    async with context.client() as client:
        service = InventoryService(context.settings, client, context.assignments, context.pools)
        return await service.next_available()


async def search_inventory(
    term: Annotated[str, Field(description='IP, hostname or MAC fragment (case-insensitive)')],
) -> list[InventoryMatch]:
    """Search leases, reservations and static IPs for an address, hostname or MAC.

    When to use this tool:
    - Finding who holds an address
    - Locating a device by MAC in any of the three inventories
    - Hunting duplicates behind an overcommitted pool

    Args:
        term: Substring to match; MACs match with either ':' or '-' separators

    Returns:
        Matching records tagged with their source (lease, reservation, static)
    """
    context = get_context()
    async with context.client() as client:
        service = InventoryService(context.settings, client, context.assignments, context.pools)
        return await service.search(term)
