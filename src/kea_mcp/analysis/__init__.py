"""Inventory reconciliation, allocation and HA health analysis."""

from kea_mcp.analysis.allocation import compute_ip_range_size, next_available, pool_size
from kea_mcp.analysis.conflicts import check_address_conflict, check_identifier_conflict
from kea_mcp.analysis.ha_status import get_cluster_status, probe_cluster, reduce_cluster_status
from kea_mcp.analysis.utilization import (
    build_inventory_index,
    classify_headroom,
    compute_assignment_statistics,
    compute_lease_statistics,
    compute_utilization,
    enrich_reservations,
    filter_records,
    format_expiration,
)


__all__ = [
    'build_inventory_index',
    'check_address_conflict',
    'check_identifier_conflict',
    'classify_headroom',
    'compute_assignment_statistics',
    'compute_ip_range_size',
    'compute_lease_statistics',
    'compute_utilization',
    'enrich_reservations',
    'filter_records',
    'format_expiration',
    'get_cluster_status',
    'next_available',
    'pool_size',
    'probe_cluster',
    'reduce_cluster_status',
]
