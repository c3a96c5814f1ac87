"""Reconciliation across leases, reservations and static assignments.

Each operation fetches what it needs concurrently and hands the snapshot to
a pure function from ``kea_mcp.analysis``. A failed fetch fails the whole
operation; no partial inventory is ever reduced.
"""

import asyncio
from kea_mcp.analysis.allocation import WIDE_RANGE_SIZE, compute_ip_range_size, next_available
from kea_mcp.analysis.utilization import (
    build_inventory_index,
    compute_lease_statistics,
    compute_utilization,
    filter_records,
)
from kea_mcp.config import Settings
from kea_mcp.models import (
    InventoryMatch,
    LeaseStatistics,
    NextAvailableAddress,
    PoolUtilization,
)
from kea_mcp.services.pool import PoolService
from kea_mcp.storage import AssignmentStore, PoolConfigStore
from kea_mcp.utils.client import KeaClient
from kea_mcp.utils.errors import NoAvailableAddressError
from loguru import logger


class InventoryService:
    """Utilization, allocation and search over the three address inventories."""

    def __init__(
        self,
        settings: Settings,
        client: KeaClient,
        assignments: AssignmentStore,
        pools: PoolConfigStore,
    ):
        self.settings = settings
        self.client = client
        self.assignments = assignments
        self.pool_service = PoolService(settings, pools)

    async def utilization(self) -> PoolUtilization:
        pool, reservations, statics = await asyncio.gather(
            self.pool_service.get_active(),
            self.client.get_reservations(self.settings.subnet_id),
            self.assignments.list_all(),
        )
        result = compute_utilization(pool, reservations, statics)
        if result.available_count < 0:
            logger.warning(
                f'Pool {pool.range} is overcommitted by {-result.available_count} addresses'
            )
        return result

    async def next_available(self) -> NextAvailableAddress:
        """Lowest address in the active pool not leased, reserved or statically assigned."""
        subnet_id = self.settings.subnet_id
        pool, leases, reservations, statics = await asyncio.gather(
            self.pool_service.get_active(),
            self.client.get_leases(subnet_id),
            self.client.get_reservations(subnet_id),
            self.assignments.list_all(),
        )

        occupied = {lease.ip_address for lease in leases if lease.is_active}
        occupied.update(reservation.ip_address for reservation in reservations)
        occupied.update(assignment.ip_address for assignment in statics)

        if compute_ip_range_size(pool.start_ip, pool.end_ip) > WIDE_RANGE_SIZE:
            candidate = await asyncio.to_thread(next_available, pool.start_ip, pool.end_ip, occupied)
        else:
            candidate = next_available(pool.start_ip, pool.end_ip, occupied)
        if candidate is None:
            raise NoAvailableAddressError(pool.start_ip, pool.end_ip)

        return NextAvailableAddress(
            ip_address=candidate,
            subnet_id=subnet_id,
            pool_range=pool.range,
            occupied_count=len(occupied),
        )

    async def lease_statistics(self) -> LeaseStatistics:
        subnet_id = self.settings.subnet_id
        leases = await self.client.get_leases(subnet_id)
        return compute_lease_statistics(leases, self.settings.lease_scope_total, subnet_id)

    async def search(self, term: str) -> list[InventoryMatch]:
        subnet_id = self.settings.subnet_id
        leases, reservations, statics = await asyncio.gather(
            self.client.get_leases(subnet_id),
            self.client.get_reservations(subnet_id),
            self.assignments.list_all(),
        )
        return filter_records(build_inventory_index(leases, reservations, statics), term)
