"""Cross-inventory conflict detection run before any write.

Static assignments are carved out of, and must never overlap, DHCP
allocations. The checks only guard new writes; data that is already
inconsistent is reported through utilization numbers and left alone.
"""

from collections.abc import Iterable
from kea_mcp.models import (
    AddressAssignment,
    IdentifierExists,
    NoConflict,
    Reservation,
    ReservationExists,
    StaticExists,
)
from kea_mcp.utils.addresses import canonical_ip, is_valid_ipv4, normalize_mac


def _same_ip(first: str, second: str) -> bool:
    if first == second:
        return True
    if is_valid_ipv4(first) and is_valid_ipv4(second):
        return canonical_ip(first) == canonical_ip(second)
    return False


def check_address_conflict(
    candidate: str,
    static_assignments: Iterable[AddressAssignment],
    reservations: Iterable[Reservation],
    *,
    creating_static: bool = True,
    exclude_id: str | None = None,
) -> NoConflict | StaticExists | ReservationExists:
    """Check whether ``candidate`` is already claimed.

    A static assignment holding the address always wins. A reservation
    holding it only counts when the write is a static assignment; two
    reservations for one address are the DHCP server's concern.

    Args:
        candidate: Address about to be written
        static_assignments: Current static inventory
        reservations: Current reservations for the target subnet
        creating_static: The write creates or moves a static assignment
        exclude_id: Static assignment being updated (ignored in the check)
    """
    for assignment in static_assignments:
        if assignment.id == exclude_id:
            continue
        if _same_ip(assignment.ip_address, candidate):
            return StaticExists(existing=assignment)

    if creating_static:
        for reservation in reservations:
            if _same_ip(reservation.ip_address, candidate):
                return ReservationExists(existing=reservation)

    return NoConflict()


def check_identifier_conflict(
    candidate_mac: str | None,
    static_assignments: Iterable[AddressAssignment],
    exclude_id: str | None = None,
) -> NoConflict | IdentifierExists:
    """A MAC may be bound to at most one static assignment."""
    if not candidate_mac:
        return NoConflict()

    wanted = normalize_mac(candidate_mac) or candidate_mac.lower()
    for assignment in static_assignments:
        if assignment.id == exclude_id or not assignment.mac_address:
            continue
        if (normalize_mac(assignment.mac_address) or assignment.mac_address.lower()) == wanted:
            return IdentifierExists(existing=assignment)

    return NoConflict()
