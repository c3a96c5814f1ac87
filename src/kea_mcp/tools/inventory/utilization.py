"""Pool utilization and lease statistics tools."""

from kea_mcp.context import get_context
from kea_mcp.models import LeaseStatistics, PoolUtilization
from kea_mcp.services import InventoryService


async def get_ip_utilization() -> PoolUtilization:
    """Show how much of the reservation pool is used by reservations and static IPs.

    When to use this tool:
    - Before handing out a new static IP or reservation
    - Capacity planning for the reserved address range
    - Spotting an overcommitted pool (negative available_count)

    Common workflow:
    1. Use get_ip_utilization() to see remaining headroom
    2. Use get_next_available_ip() to pick a free address
    3. Use set_pool_config() if the pool needs to grow

    What to do next:
    - If status is Low: widen the pool or release unused reservations
    - If available_count is negative: reservations and static IPs exceed the
      pool; use search_inventory() to find duplicates

    Returns:
        PoolUtilization with total, reserved, static, used and available
        counts plus a Low/Moderate/Good status

    Raises:
        ToolError: CONTROLLER_UNREACHABLE if the Kea Control Agent cannot be reached
        ToolError: UPSTREAM_ERROR if Kea rejects the reservation query
    """
    context = get_context()
    async with context.client() as client:
        service = InventoryService(context.settings, client, context.assignments, context.pools)
        return await service.utilization()


async def get_lease_statistics() -> LeaseStatistics:
    """Count active DHCP leases in the configured subnet against the lease scope.

    When to use this tool:
    - Checking whether the dynamic range is running out
    - Comparing lease load before and after a change

    Returns:
        LeaseStatistics with total, active and available counts and status

    Raises:
        ToolError: CONTROLLER_UNREACHABLE if the Kea Control Agent cannot be reached
    """
    context = get_context()
    async with context.client() as client:
        service = InventoryService(context.settings, client, context.assignments, context.pools)
        return await service.lease_statistics()
