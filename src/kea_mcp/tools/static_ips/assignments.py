"""Static IP assignment tools (create, read, update, delete)."""

from kea_mcp.context import get_context
from kea_mcp.models import AddressAssignment, AssignmentFields
from kea_mcp.services import StaticIPService
from kea_mcp.utils.errors import ToolError
from kea_mcp.utils.logging import log_tool_call, log_tool_result
from pydantic import Field
from typing import Annotated, Any


def _fields(
    ip_address: str, mac_address: str | None, hostname: str | None, description: str | None
) -> AssignmentFields:
    return AssignmentFields(
        ip_address=ip_address,
        mac_address=mac_address,
        hostname=hostname,
        description=description,
    )


async def list_static_ips() -> list[AddressAssignment]:
    """List every static IP assignment, ordered by address.

    When to use this tool:
    - Reviewing which addresses are handed out manually
    - Finding the ID needed by update_static_ip() or delete_static_ip()

    Returns:
        All static assignments sorted by IP address
    """
    context = get_context()
    async with context.client() as client:
        return await StaticIPService(context.settings, client, context.assignments).list_all()


async def get_static_ip(
    assignment_id: Annotated[str, Field(description='Static assignment ID')],
) -> AddressAssignment:
    """Get one static IP assignment by ID.

    Raises:
        ToolError: NOT_FOUND if no assignment has this ID
    """
    context = get_context()
    async with context.client() as client:
        return await StaticIPService(context.settings, client, context.assignments).get(assignment_id)


async def add_static_ip(
    ip_address: Annotated[str, Field(description='IPv4 address to assign (e.g., 192.168.1.50)')],
    mac_address: Annotated[
        str | None, Field(description='Device MAC (AA:BB:CC:DD:EE:FF or AA-BB-CC-DD-EE-FF)')
    ] = None,
    hostname: Annotated[str | None, Field(description='Device hostname (RFC 1123 label)')] = None,
    description: Annotated[str | None, Field(description='Free-form note')] = None,
) -> AddressAssignment:
    """Record a static IP assignment for a device configured by hand.

    The address must not already be a static IP or a DHCP reservation, and
    the MAC (if given) must not belong to another static IP. If the Kea
    server cannot be reached the write is refused rather than risking a
    clash.

    When to use this tool:
    - Documenting a printer, NAS or switch with a hard-coded address
    - Claiming an address inside the reservation pool

    Common workflow:
    1. Use get_next_available_ip() to pick a free address
    2. Use add_static_ip() to record it
    3. Use get_ip_utilization() to confirm the remaining headroom

    Args:
        ip_address: Address to assign
        mac_address: Optional device MAC, stored lowercase with ':' separators
        hostname: Optional hostname
        description: Optional note

    Returns:
        The stored AddressAssignment with its new ID

    Raises:
        ToolError: VALIDATION_FAILED listing every invalid field
        ToolError: ADDRESS_CONFLICT if a static IP or reservation holds the address
        ToolError: IDENTIFIER_CONFLICT if the MAC belongs to another static IP
        ToolError: CONTROLLER_UNREACHABLE if reservations cannot be checked
    """
    params: dict[str, Any] = {'ip_address': ip_address, 'mac_address': mac_address}
    call_id = log_tool_call('add_static_ip', params)

    context = get_context()
    try:
        async with context.client() as client:
            service = StaticIPService(context.settings, client, context.assignments)
            record = await service.add(_fields(ip_address, mac_address, hostname, description))
    except ToolError as e:
        log_tool_result('add_static_ip', success=False, error=e.message, correlation_id=call_id)
        raise

    log_tool_result('add_static_ip', success=True, result=record, correlation_id=call_id)
    return record


async def update_static_ip(
    assignment_id: Annotated[str, Field(description='Static assignment ID')],
    ip_address: Annotated[str, Field(description='New or unchanged IPv4 address')],
    mac_address: Annotated[str | None, Field(description='Device MAC')] = None,
    hostname: Annotated[str | None, Field(description='Device hostname')] = None,
    description: Annotated[str | None, Field(description='Free-form note')] = None,
) -> AddressAssignment:
    """Replace the fields of an existing static IP assignment.

    The assignment itself is ignored in the conflict checks. Reservations are
    only checked when the address changes.

    Raises:
        ToolError: NOT_FOUND if no assignment has this ID
        ToolError: VALIDATION_FAILED listing every invalid field
        ToolError: ADDRESS_CONFLICT / IDENTIFIER_CONFLICT on a clash
    """
    call_id = log_tool_call(
        'update_static_ip', {'assignment_id': assignment_id, 'ip_address': ip_address}
    )

    context = get_context()
    try:
        async with context.client() as client:
            service = StaticIPService(context.settings, client, context.assignments)
            record = await service.update(
                assignment_id, _fields(ip_address, mac_address, hostname, description)
            )
    except ToolError as e:
        log_tool_result('update_static_ip', success=False, error=e.message, correlation_id=call_id)
        raise

    log_tool_result('update_static_ip', success=True, result=record, correlation_id=call_id)
    return record


async def delete_static_ip(
    assignment_id: Annotated[str, Field(description='Static assignment ID')],
) -> AddressAssignment:
    """Delete one static IP assignment and return what was removed.

    Raises:
        ToolError: NOT_FOUND if no assignment has this ID
    """
    context = get_context()
    async with context.client() as client:
        return await StaticIPService(context.settings, client, context.assignments).delete(assignment_id)


async def reset_static_ips(
    confirm: Annotated[bool, Field(description='Must be true to delete every static IP')] = False,
) -> dict[str, Any]:
    """Delete ALL static IP assignments.

    When to use this tool:
    - Starting over after importing the wrong data

    Args:
        confirm: Safety switch; nothing is deleted unless true

    Returns:
        Number of deleted assignments
    """
    if not confirm:
        return {'deleted': 0, 'message': 'Nothing deleted; pass confirm=true to delete all static IPs'}

    context = get_context()
    async with context.client() as client:
        count = await StaticIPService(context.settings, client, context.assignments).reset()
    return {'deleted': count, 'message': f'Deleted {count} static IPs'}
