"""Static IP assignment tools."""

from kea_mcp.tools.static_ips.assignments import (
    add_static_ip,
    delete_static_ip,
    get_static_ip,
    list_static_ips,
    reset_static_ips,
    update_static_ip,
)
from kea_mcp.tools.static_ips.lookup import check_static_ip, get_static_ip_statistics

__all__ = [
    'add_static_ip',
    'check_static_ip',
    'delete_static_ip',
    'get_static_ip',
    'get_static_ip_statistics',
    'list_static_ips',
    'reset_static_ips',
    'update_static_ip',
]
