"""IPv4, MAC and hostname helpers shared by the inventory tools."""

import re
from kea_mcp.utils.errors import ValidationError


_HOSTNAME_RE = re.compile(r'^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$')
_MAC_RE = re.compile(r'^([0-9a-fA-F]{2}[:-]){5}[0-9a-fA-F]{2}$')


def is_valid_ipv4(ip: str) -> bool:
    """Dotted-quad IPv4 validation (four decimal octets, 0-255)."""
    try:
        parts = ip.split('.')
        if len(parts) != 4:
            return False
        for part in parts:
            if not (part.isascii() and part.isdigit()) or len(part) > 3:
                return False
            if not 0 <= int(part) <= 255:
                return False
        return True
    except AttributeError:
        return False


def is_valid_mac(mac: str) -> bool:
    """Accepts AA:BB:CC:DD:EE:FF or AA-BB-CC-DD-EE-FF."""
    return bool(mac) and bool(_MAC_RE.match(mac))


def is_valid_hostname(hostname: str) -> bool:
    """Single RFC 1123 label."""
    return bool(hostname) and bool(_HOSTNAME_RE.match(hostname))


def normalize_mac(mac: str) -> str | None:
    """Normalize MAC address to standard format (aa:bb:cc:dd:ee:ff)."""
    mac_clean = ''.join(c for c in mac.lower() if c in '0123456789abcdef')

    if len(mac_clean) != 12:
        return None

    return ':'.join(mac_clean[i : i + 2] for i in range(0, 12, 2))


def ip_to_int(ip: str) -> int:
    """Pack a dotted-quad address into a 32-bit unsigned integer (big-endian)."""
    if not is_valid_ipv4(ip):
        raise ValidationError('Invalid IP address format', details=[f'{ip!r} is not an IPv4 address'])

    value = 0
    for octet in ip.split('.'):
        value = (value << 8) | int(octet)
    return value


def int_to_ip(value: int) -> str:
    """Unpack a 32-bit unsigned integer into dotted-quad form."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValidationError('Address out of IPv4 range', details=[str(value)])
    return '.'.join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def last_octet(ip: str) -> int:
    return ip_to_int(ip) & 0xFF


def same_slash24(first: str, second: str) -> bool:
    """Both addresses share their first three octets."""
    return ip_to_int(first) >> 8 == ip_to_int(second) >> 8


def collect_assignment_errors(
    ip_address: str | None,
    mac_address: str | None = None,
    hostname: str | None = None,
) -> list[str]:
    """Return every validation problem found in a static assignment payload."""
    errors = []

    if not ip_address:
        errors.append('IP address is required')
    elif not is_valid_ipv4(ip_address):
        errors.append('Invalid IP address format')

    if mac_address and not is_valid_mac(mac_address):
        errors.append('Invalid MAC address format (use AA:BB:CC:DD:EE:FF or AA-BB-CC-DD-EE-FF)')

    if hostname and not is_valid_hostname(hostname):
        errors.append('Invalid hostname format')

    return errors


def canonical_ip(ip: str) -> str:
    """Dotted-quad form without leading zeros ("10.0.0.010" -> "10.0.0.10")."""
    return int_to_ip(ip_to_int(ip))
