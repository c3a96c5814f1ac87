"""Host reservation tools."""

from kea_mcp.context import get_context
from kea_mcp.models import EnrichedReservation, Reservation
from kea_mcp.services import DhcpService
from kea_mcp.utils.errors import ToolError
from kea_mcp.utils.logging import log_tool_call, log_tool_result
from pydantic import Field
from typing import Annotated, Any


async def list_reservations() -> list[EnrichedReservation]:
    """List host reservations in the configured subnet with their lease status.

    Each reservation is marked active when a current lease holds the
    reserved address, with the time left on that lease.

    When to use this tool:
    - Auditing which reserved devices are actually online
    - Finding stale reservations to free pool space

    Returns:
        Reservations with is_active, the matching lease and expires_in
    """
    context = get_context()
    async with context.client() as client:
        return await DhcpService(context.settings, client, context.assignments).reservations()


async def add_reservation(
    ip_address: Annotated[str, Field(description='IPv4 address to reserve')],
    mac_address: Annotated[str, Field(description='Client MAC (AA:BB:CC:DD:EE:FF)')],
    hostname: Annotated[str | None, Field(description='Optional hostname')] = None,
) -> Reservation:
    """Create a DHCP host reservation.

    Refused when the address is already recorded as a static IP.

    Common workflow:
    1. Use get_next_available_ip() to pick a free address
    2. Use add_reservation() to pin it to the device
    3. Use delete_lease() if the device still holds an older dynamic lease

    Raises:
        ToolError: VALIDATION_FAILED listing every invalid field
        ToolError: ADDRESS_CONFLICT if a static IP holds the address
        ToolError: UPSTREAM_ERROR if Kea rejects the reservation
    """
    call_id = log_tool_call(
        'add_reservation', {'ip_address': ip_address, 'mac_address': mac_address}
    )

    context = get_context()
    try:
        async with context.client() as client:
            service = DhcpService(context.settings, client, context.assignments)
            reservation = await service.add_reservation(ip_address, mac_address, hostname)
    except ToolError as e:
        log_tool_result('add_reservation', success=False, error=e.message, correlation_id=call_id)
        raise

    log_tool_result('add_reservation', success=True, result=reservation, correlation_id=call_id)
    return reservation


async def modify_reservation(
    ip_address: Annotated[str, Field(description='Reserved IPv4 address')],
    mac_address: Annotated[str, Field(description='Client MAC (AA:BB:CC:DD:EE:FF)')],
    hostname: Annotated[str | None, Field(description='Optional hostname')] = None,
) -> Reservation:
    """Change the MAC or hostname of an existing reservation.

    Raises:
        ToolError: UPSTREAM_ERROR if Kea has no reservation for the address
    """
    context = get_context()
    async with context.client() as client:
        service = DhcpService(context.settings, client, context.assignments)
        return await service.modify_reservation(ip_address, mac_address, hostname)


async def delete_reservation(
    ip_address: Annotated[str, Field(description='Reserved IPv4 address')],
) -> dict[str, Any]:
    """Delete the reservation for an address in the configured subnet."""
    context = get_context()
    async with context.client() as client:
        await DhcpService(context.settings, client, context.assignments).delete_reservation(ip_address)
    return {'deleted': ip_address}
