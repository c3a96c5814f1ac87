"""Static IP assignments guarded against DHCP reservations."""

import asyncio
from kea_mcp.analysis.conflicts import check_address_conflict, check_identifier_conflict
from kea_mcp.analysis.utilization import compute_assignment_statistics
from kea_mcp.config import Settings
from kea_mcp.models import (
    AddressAssignment,
    AssignmentFields,
    AssignmentStatistics,
    IdentifierExists,
    ReservationExists,
    StaticExists,
    StaticIPCheck,
)
from kea_mcp.storage import AssignmentStore
from kea_mcp.utils.addresses import canonical_ip, is_valid_ipv4
from kea_mcp.utils.client import KeaClient
from kea_mcp.utils.errors import ConflictError, ErrorCodes, ValidationError
from loguru import logger


class StaticIPService:
    """Create, change and inspect static IP assignments."""

    def __init__(self, settings: Settings, client: KeaClient, assignments: AssignmentStore):
        self.settings = settings
        self.client = client
        self.assignments = assignments

    async def list_all(self) -> list[AddressAssignment]:
        return await self.assignments.list_all()

    async def get(self, assignment_id: str) -> AddressAssignment:
        return await self.assignments.get(assignment_id)

    async def _guard(self, fields: AssignmentFields, current: AddressAssignment | None = None) -> None:
        """Raise ``ConflictError`` if the write would collide with another record.

        Reservations are only fetched when the write creates an assignment
        or moves one to a new address; an unreachable server fails the write.
        """
        moving = current is None or current.ip_address != fields.ip_address
        exclude_id = current.id if current else None

        if moving:
            statics, reservations = await asyncio.gather(
                self.assignments.list_all(),
                self.client.get_reservations(self.settings.subnet_id),
            )
        else:
            statics, reservations = await self.assignments.list_all(), []

        conflict = check_address_conflict(
            fields.ip_address,
            statics,
            reservations,
            creating_static=moving,
            exclude_id=exclude_id,
        )
        if isinstance(conflict, StaticExists):
            raise ConflictError(
                f'IP address {fields.ip_address} is already assigned as a static IP',
                existing=conflict.existing,
                suggestion='Pick another address or update the existing assignment',
                related_tools=['get_next_available_ip', 'update_static_ip'],
            )
        if isinstance(conflict, ReservationExists):
            raise ConflictError(
                f'IP address {fields.ip_address} has a DHCP reservation',
                existing=conflict.existing,
                suggestion='Delete the reservation first or pick another address',
                related_tools=['list_reservations', 'get_next_available_ip'],
            )

        identifier = check_identifier_conflict(fields.mac_address, statics, exclude_id=exclude_id)
        if isinstance(identifier, IdentifierExists):
            raise ConflictError(
                f'MAC address {fields.mac_address} is already assigned to IP '
                f'{identifier.existing.ip_address}',
                existing=identifier.existing,
                error_code=ErrorCodes.IDENTIFIER_CONFLICT,
            )

    async def add(self, fields: AssignmentFields) -> AddressAssignment:
        await self._guard(fields)
        record = await self.assignments.create(fields)
        logger.info(f'Static IP created: {record.ip_address}', mac=record.mac_address)
        return record

    async def update(self, assignment_id: str, fields: AssignmentFields) -> AddressAssignment:
        current = await self.assignments.get(assignment_id)
        await self._guard(fields, current)
        record = await self.assignments.update(assignment_id, fields)
        logger.info(f'Static IP updated: {current.ip_address} -> {record.ip_address}')
        return record

    async def delete(self, assignment_id: str) -> AddressAssignment:
        removed = await self.assignments.delete(assignment_id)
        logger.info(f'Static IP deleted: {removed.ip_address}')
        return removed

    async def reset(self) -> int:
        count = await self.assignments.delete_all()
        logger.warning(f'All static IPs deleted ({count} records)')
        return count

    async def check(self, ip_address: str) -> StaticIPCheck:
        if not is_valid_ipv4(ip_address):
            raise ValidationError('Invalid IP address format', details=[f'{ip_address!r}'])

        ip_address = canonical_ip(ip_address)
        record = await self.assignments.get_by_address(ip_address)
        return StaticIPCheck(ip_address=ip_address, exists=record is not None, assignment=record)

    async def statistics(self) -> AssignmentStatistics:
        return compute_assignment_statistics(await self.assignments.list_all())
