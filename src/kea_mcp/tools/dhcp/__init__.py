"""Kea lease and reservation tools."""

from kea_mcp.tools.dhcp.leases import delete_lease, get_dhcp_config, list_leases
from kea_mcp.tools.dhcp.reservations import (
    add_reservation,
    delete_reservation,
    list_reservations,
    modify_reservation,
)

__all__ = [
    'add_reservation',
    'delete_lease',
    'delete_reservation',
    'get_dhcp_config',
    'list_leases',
    'list_reservations',
    'modify_reservation',
]
