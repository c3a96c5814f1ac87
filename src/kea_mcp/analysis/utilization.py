"""Pool capacity and lease statistics.

Everything here is a pure reduction over collections that the caller has
already fetched; nothing reads or writes external state.
"""

from collections.abc import Iterable, Sequence
from kea_mcp.models import (
    AddressAssignment,
    AssignmentStatistics,
    EnrichedReservation,
    InventoryMatch,
    Lease,
    LeaseStatistics,
    PoolConfig,
    PoolUtilization,
    Reservation,
)
from kea_mcp.models.inventory import UtilizationStatus
from kea_mcp.utils.addresses import normalize_mac


# Headroom thresholds as a fraction of the pool size
LOW_HEADROOM = 0.20
MODERATE_HEADROOM = 0.60


def classify_headroom(available: int, total: int) -> UtilizationStatus:
    """Three-level headroom classification relative to pool size."""
    if total <= 0:
        return 'Low'

    fraction = available / total
    if fraction < LOW_HEADROOM:
        return 'Low'
    if fraction < MODERATE_HEADROOM:
        return 'Moderate'
    return 'Good'


def compute_utilization(
    pool: PoolConfig,
    reservations: Sequence[Reservation],
    static_assignments: Sequence[AddressAssignment],
) -> PoolUtilization:
    """Reduce the pool and both address inventories into capacity numbers.

    Reservations and static assignments are assumed to occupy disjoint
    addresses; overlaps are not subtracted, so inconsistent data shows up
    as an inflated ``used_count`` rather than being hidden.
    """
    reserved_count = len(reservations)
    static_count = len(static_assignments)
    used_count = reserved_count + static_count
    available_count = pool.total - used_count

    return PoolUtilization(
        pool_range=pool.range,
        total=pool.total,
        reserved_count=reserved_count,
        static_count=static_count,
        used_count=used_count,
        available_count=available_count,
        status=classify_headroom(available_count, pool.total),
    )


def compute_lease_statistics(leases: Iterable[Lease], scope_total: int, subnet_id: int) -> LeaseStatistics:
    """Count active leases in one subnet against its scope size."""
    active = sum(1 for lease in leases if lease.subnet_id == subnet_id and lease.is_active)
    available = scope_total - active
    return LeaseStatistics(
        subnet_id=subnet_id,
        total=scope_total,
        active=active,
        available=available,
        status=classify_headroom(available, scope_total),
    )


def compute_assignment_statistics(assignments: Sequence[AddressAssignment]) -> AssignmentStatistics:
    return AssignmentStatistics(
        total=len(assignments),
        with_mac=sum(1 for a in assignments if a.mac_address),
        with_hostname=sum(1 for a in assignments if a.hostname),
        with_description=sum(1 for a in assignments if a.description),
    )


def format_expiration(lease: Lease | None, now: float) -> str:
    """Format time left on a lease as "5d 3h", "2h 30m", "45m" or "Expired".

    Args:
        lease: Lease to format
        now: Current time as epoch seconds
    """
    if lease is None:
        return 'No Data'

    expires = lease.expires_at
    if expires is None:
        return 'Unknown'

    remaining = int(expires - now)
    if remaining <= 0:
        return 'Expired'

    days = remaining // 86400
    hours = (remaining % 86400) // 3600
    minutes = (remaining % 3600) // 60

    if days > 0:
        return f'{days}d {hours}h' if hours > 0 else f'{days}d'
    if hours > 0:
        return f'{hours}h {minutes}m' if minutes > 0 else f'{hours}h'
    return f'{minutes}m'


def enrich_reservations(
    reservations: Sequence[Reservation],
    leases: Iterable[Lease],
    now: float | None = None,
) -> list[EnrichedReservation]:
    """Mark each reservation whose address currently holds an active lease."""
    lease_by_ip = {lease.ip_address: lease for lease in leases if lease.is_active}

    enriched = []
    for reservation in reservations:
        lease = lease_by_ip.get(reservation.ip_address)
        enriched.append(
            EnrichedReservation(
                reservation=reservation,
                is_active=lease is not None,
                lease=lease,
                expires_in=format_expiration(lease, now) if lease and now is not None else None,
            )
        )
    return enriched


def filter_records(records: Iterable[InventoryMatch], term: str) -> list[InventoryMatch]:
    """Case-insensitive substring search over IP, hostname and MAC."""
    needle = term.strip().lower()
    records = list(records)
    if not needle:
        return records

    mac_needle = (normalize_mac(needle) or needle).replace('-', ':')
    return [
        record
        for record in records
        if needle in record.ip_address.lower()
        or (record.hostname and needle in record.hostname.lower())
        or (record.mac_address and mac_needle in record.mac_address.lower().replace('-', ':'))
    ]


def build_inventory_index(
    leases: Iterable[Lease],
    reservations: Iterable[Reservation],
    assignments: Iterable[AddressAssignment],
) -> list[InventoryMatch]:
    """Flatten the three inventories into one searchable list."""
    records = [
        InventoryMatch(source='lease', ip_address=lease.ip_address, mac_address=lease.hw_address, hostname=lease.hostname)
        for lease in leases
    ]
    records.extend(
        InventoryMatch(source='reservation', ip_address=r.ip_address, mac_address=r.hw_address, hostname=r.hostname)
        for r in reservations
    )
    records.extend(
        InventoryMatch(source='static', ip_address=a.ip_address, mac_address=a.mac_address, hostname=a.hostname)
        for a in assignments
    )
    return records
