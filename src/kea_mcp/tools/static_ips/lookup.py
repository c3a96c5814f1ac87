"""Static IP lookup and statistics tools."""

from kea_mcp.context import get_context
from kea_mcp.models import AssignmentStatistics, StaticIPCheck
from kea_mcp.services import StaticIPService
from pydantic import Field
from typing import Annotated


async def check_static_ip(
    ip_address: Annotated[str, Field(description='IPv4 address to look up')],
) -> StaticIPCheck:
    """Check whether an address is already recorded as a static IP.

    Only the static inventory is consulted; use search_inventory() to also
    look at leases and reservations.

    Raises:
        ToolError: VALIDATION_FAILED if the address is malformed
    """
    context = get_context()
    async with context.client() as client:
        return await StaticIPService(context.settings, client, context.assignments).check(ip_address)


async def get_static_ip_statistics() -> AssignmentStatistics:
    """Summarize the static inventory: total and how many carry a MAC, hostname or note."""
    context = get_context()
    async with context.client() as client:
        return await StaticIPService(context.settings, client, context.assignments).statistics()
