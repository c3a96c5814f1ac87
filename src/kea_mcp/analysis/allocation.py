"""Next-free-address allocation within a bounded pool."""

from collections.abc import Iterable
from kea_mcp.utils.addresses import int_to_ip, ip_to_int, last_octet
from kea_mcp.utils.errors import ValidationError


# Ranges larger than one /24 are scanned off the event loop
WIDE_RANGE_SIZE = 256


def pool_size(start_ip: str, end_ip: str) -> int:
    """Size of a pool whose endpoints share the same first three octets.

    Returns 0 when ``end_ip`` sorts before ``start_ip``.
    """
    return max(0, last_octet(end_ip) - last_octet(start_ip) + 1)


def compute_ip_range_size(start_ip: str, end_ip: str) -> int:
    """Full 32-bit range size, used for the environment fallback pool."""
    return max(0, ip_to_int(end_ip) - ip_to_int(start_ip) + 1)


def next_available(start_ip: str, end_ip: str, occupied: Iterable[str]) -> str | None:
    """Return the lowest address in ``[start_ip, end_ip]`` not in ``occupied``.

    The scan is strictly ascending, so the same range and occupied set always
    yield the same address. Returns None once the range is exhausted.

    Raises:
        ValidationError: if either endpoint is malformed or end < start
    """
    start = ip_to_int(start_ip)
    end = ip_to_int(end_ip)
    if end < start:
        raise ValidationError(
            'Invalid pool range',
            details=[f'End IP {end_ip} must not be lower than start IP {start_ip}'],
        )

    taken = occupied if isinstance(occupied, (set, frozenset)) else set(occupied)
    for value in range(start, end + 1):
        candidate = int_to_ip(value)
        if candidate not in taken:
            return candidate
    return None
