"""HA cluster health: concurrent heartbeat probes and the status reducer."""

import asyncio
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from kea_mcp.models import (
    HEALTHY_STATES,
    ClusterNodeStatus,
    ClusterSeverity,
    ClusterStatus,
    HAState,
    HeartbeatPayload,
)
from loguru import logger
from typing import Protocol


class HeartbeatSource(Protocol):
    async def ha_heartbeat(self, server_name: str) -> HeartbeatPayload: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def probe_node(source: HeartbeatSource, name: str, timeout: float) -> ClusterNodeStatus:
    """Probe one node; every failure, timeouts included, becomes an unreachable record."""
    try:
        payload = await asyncio.wait_for(source.ha_heartbeat(name), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f'Heartbeat to {name} timed out after {timeout}s')
        return ClusterNodeStatus.unreachable(name, f'Heartbeat timed out after {timeout}s', _utcnow())
    except Exception as e:
        logger.warning(f'Heartbeat to {name} failed: {e}')
        return ClusterNodeStatus.unreachable(name, str(e) or type(e).__name__, _utcnow())

    return ClusterNodeStatus.from_heartbeat(name, payload, _utcnow())


async def probe_cluster(
    source: HeartbeatSource, node_names: Sequence[str], timeout: float
) -> dict[str, ClusterNodeStatus]:
    """Probe every node concurrently; one failing node never hides the other."""
    results = await asyncio.gather(*(probe_node(source, name, timeout) for name in node_names))
    return {status.name: status for status in results}


def reduce_cluster_status(
    nodes: Mapping[str, ClusterNodeStatus], checked_at: datetime | None = None
) -> ClusterStatus:
    """Reduce per-node heartbeats into one cluster verdict.

    Precedence:
    1. no node answered -> critical
    2. any node reports partner-down -> critical
    3. any node in hot-standby, load-balancing or backup -> healthy
    4. states present but none recognised -> warning (transition)
    5. answers without a state -> warning

    A healthy verdict is then downgraded to warning if a node did not answer,
    or failing that, if any node has unsent lease updates. Warning and
    critical verdicts are never adjusted.
    """
    checked_at = checked_at or _utcnow()
    reachable = [node for node in nodes.values() if node.reachable]
    unreachable = [node for node in nodes.values() if not node.reachable]

    def verdict(overall: ClusterSeverity, message: str, details: str | None = None) -> ClusterStatus:
        return ClusterStatus(
            overall=overall,
            message=message,
            details=details,
            nodes=dict(nodes),
            checked_at=checked_at,
        )

    if not reachable:
        errors = '; '.join(f'{node.name}: {node.error}' for node in unreachable if node.error)
        return verdict(ClusterSeverity.CRITICAL, 'Cannot communicate with any HA nodes', errors or None)

    # Ordered, de-duplicated states as reported
    states = list(dict.fromkeys(node.state for node in reachable if node.state))

    if HAState.PARTNER_DOWN.value in states:
        down = ', '.join(node.name for node in reachable if node.state == HAState.PARTNER_DOWN.value)
        return verdict(
            ClusterSeverity.CRITICAL,
            'Partner down detected',
            f'{down} reports partner-down and is serving all requests',
        )

    healthy_seen = [state for state in states if state in HEALTHY_STATES]
    if healthy_seen:
        status = verdict(ClusterSeverity.HEALTHY, f'Cluster healthy: {", ".join(healthy_seen)}')
    elif states:
        return verdict(
            ClusterSeverity.WARNING,
            'Cluster in transition or unknown state',
            f'Reported states: {", ".join(states)}',
        )
    else:
        return verdict(ClusterSeverity.WARNING, 'No HA states detected')

    if unreachable:
        names = ', '.join(node.name for node in unreachable)
        return verdict(
            ClusterSeverity.WARNING,
            f'{status.message} ({len(unreachable)} node(s) not responding)',
            f'Unreachable: {names}',
        )

    max_unsent = max(node.unsent_update_count for node in reachable)
    if max_unsent > 0:
        return verdict(
            ClusterSeverity.WARNING,
            f'{status.message} ({max_unsent} unsent updates)',
            'Non-zero unsent update counts may indicate synchronization lag',
        )

    return status


async def get_cluster_status(
    source: HeartbeatSource, node_names: Sequence[str], timeout: float
) -> ClusterStatus:
    nodes = await probe_cluster(source, node_names, timeout)
    status = reduce_cluster_status(nodes)
    logger.info(
        'HA cluster status',
        overall=status.overall.value,
        reachable=status.reachable_count,
        nodes=len(nodes),
    )
    return status
