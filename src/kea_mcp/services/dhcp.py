"""Leases and host reservations held by the Kea server."""

import asyncio
import time
from kea_mcp.analysis.conflicts import check_address_conflict
from kea_mcp.analysis.utilization import enrich_reservations, filter_records
from kea_mcp.config import Settings
from kea_mcp.models import EnrichedReservation, InventoryMatch, Lease, Reservation, StaticExists
from kea_mcp.storage import AssignmentStore
from kea_mcp.utils.addresses import (
    canonical_ip,
    collect_assignment_errors,
    is_valid_ipv4,
    normalize_mac,
)
from kea_mcp.utils.client import KeaClient
from kea_mcp.utils.errors import ConflictError, ValidationError
from loguru import logger
from typing import Any


class DhcpService:
    """Lease listing and reservation management for the configured subnet."""

    def __init__(self, settings: Settings, client: KeaClient, assignments: AssignmentStore):
        self.settings = settings
        self.client = client
        self.assignments = assignments

    async def leases(self, term: str | None = None) -> list[Lease]:
        leases = await self.client.get_leases(self.settings.subnet_id)
        if not term:
            return leases

        index = [
            InventoryMatch(
                source='lease',
                ip_address=lease.ip_address,
                mac_address=lease.hw_address,
                hostname=lease.hostname,
            )
            for lease in leases
        ]
        matched = {match.ip_address for match in filter_records(index, term)}
        return [lease for lease in leases if lease.ip_address in matched]

    async def delete_lease(self, ip_address: str) -> None:
        if not is_valid_ipv4(ip_address):
            raise ValidationError('Invalid IP address format', details=[f'{ip_address!r}'])
        await self.client.delete_lease(canonical_ip(ip_address))
        logger.info(f'Lease deleted: {ip_address}')

    async def reservations(self) -> list[EnrichedReservation]:
        """Reservations marked with whether a lease currently holds the address."""
        subnet_id = self.settings.subnet_id
        reservations, leases = await asyncio.gather(
            self.client.get_reservations(subnet_id),
            self.client.get_leases(subnet_id),
        )
        return enrich_reservations(reservations, leases, now=time.time())

    def _build(self, ip_address: str, mac_address: str, hostname: str | None) -> Reservation:
        ip_address = (ip_address or '').strip()
        mac_address = (mac_address or '').strip()
        hostname = (hostname or '').strip() or None

        errors = collect_assignment_errors(ip_address, mac_address, hostname)
        if not mac_address:
            errors.insert(0, 'MAC address is required')
        if errors:
            raise ValidationError('Invalid reservation', details=errors)

        return Reservation(
            subnet_id=self.settings.subnet_id,
            ip_address=canonical_ip(ip_address),
            hw_address=normalize_mac(mac_address),
            hostname=hostname,
        )

    async def add_reservation(
        self, ip_address: str, mac_address: str, hostname: str | None = None
    ) -> Reservation:
        """Create a reservation unless a static assignment already holds the address."""
        reservation = self._build(ip_address, mac_address, hostname)

        conflict = check_address_conflict(
            reservation.ip_address,
            await self.assignments.list_all(),
            [],
            creating_static=False,
        )
        if isinstance(conflict, StaticExists):
            raise ConflictError(
                f'IP address {reservation.ip_address} is assigned as a static IP',
                existing=conflict.existing,
                suggestion='Delete the static assignment first or reserve another address',
                related_tools=['get_static_ip', 'get_next_available_ip'],
            )

        await self.client.add_reservation(reservation)
        logger.info(f'Reservation added: {reservation.ip_address}', mac=reservation.hw_address)
        return reservation

    async def modify_reservation(
        self, ip_address: str, mac_address: str, hostname: str | None = None
    ) -> Reservation:
        reservation = self._build(ip_address, mac_address, hostname)
        await self.client.update_reservation(reservation)
        logger.info(f'Reservation updated: {reservation.ip_address}')
        return reservation

    async def delete_reservation(self, ip_address: str) -> None:
        if not is_valid_ipv4(ip_address):
            raise ValidationError('Invalid IP address format', details=[f'{ip_address!r}'])
        await self.client.delete_reservation(self.settings.subnet_id, canonical_ip(ip_address))
        logger.info(f'Reservation deleted: {ip_address}')

    async def config(self) -> dict[str, Any]:
        return await self.client.get_config()
