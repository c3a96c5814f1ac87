"""HA cluster status tool."""

from kea_mcp.analysis import ha_status
from kea_mcp.context import get_context
from kea_mcp.models import ClusterStatus


async def get_cluster_status() -> ClusterStatus:
    """Check the health of the two-node Kea HA pair.

    Both peers are asked for a heartbeat at the same time. A peer that
    times out or errors is reported as unreachable; the tool itself only
    fails on a programming error.

    When to use this tool:
    - Before maintenance on either DHCP server
    - When clients report failing renewals
    - After a network change between the peers

    What to do next:
    - critical, no nodes answered: check the Control Agent URL and both servers
    - critical, partner-down: one server is serving everything; restore its peer
    - warning with unsent updates: lease sync is lagging; watch the count
    - warning, transition state: re-check in a minute (syncing/ready/waiting)

    Returns:
        ClusterStatus with overall healthy/warning/critical, message,
        details and the per-node heartbeat results
    """
    context = get_context()
    settings = context.settings
    async with context.client() as client:
        return await ha_status.get_cluster_status(
            client, settings.ha_nodes, settings.heartbeat_timeout
        )
