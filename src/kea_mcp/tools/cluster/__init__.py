"""HA cluster health tools."""

from kea_mcp.tools.cluster.ha_status import get_cluster_status

__all__ = [
    'get_cluster_status',
]
