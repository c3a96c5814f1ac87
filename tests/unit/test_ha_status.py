"""Unit tests for HA cluster health aggregation."""

import asyncio
import pytest
from datetime import datetime, timezone
from kea_mcp.analysis.ha_status import (
    get_cluster_status,
    probe_cluster,
    probe_node,
    reduce_cluster_status,
)
from kea_mcp.models import ClusterNodeStatus, ClusterSeverity, HeartbeatPayload
from kea_mcp.utils.errors import UnreachableError


CHECKED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _up(name: str, state: str | None, unsent: int = 0) -> ClusterNodeStatus:
    payload = HeartbeatPayload(state=state, unsent_update_count=unsent)
    return ClusterNodeStatus.from_heartbeat(name, payload, CHECKED_AT)


def _down(name: str) -> ClusterNodeStatus:
    return ClusterNodeStatus.unreachable(name, 'connection refused', CHECKED_AT)


def _reduce(*nodes: ClusterNodeStatus):
    return reduce_cluster_status({node.name: node for node in nodes}, CHECKED_AT)


class FakeHeartbeats:
    """Heartbeat source answering from a dict; exceptions are raised, floats are delays."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    async def ha_heartbeat(self, server_name: str) -> HeartbeatPayload:
        self.calls.append(server_name)
        answer = self.answers[server_name]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, float):
            await asyncio.sleep(answer)
            return HeartbeatPayload(state='hot-standby')
        return HeartbeatPayload(state=answer)


class TestReduceClusterStatus:
    """Test the precedence rules of the status reducer."""

    def test_no_node_reachable_is_critical(self):
        status = _reduce(_down('server1'), _down('server2'))
        assert status.overall == ClusterSeverity.CRITICAL
        assert status.message == 'Cannot communicate with any HA nodes'
        assert 'connection refused' in status.details

    def test_empty_node_map_is_critical(self):
        assert reduce_cluster_status({}, CHECKED_AT).overall == ClusterSeverity.CRITICAL

    def test_partner_down_is_critical(self):
        status = _reduce(_up('server1', 'partner-down'), _down('server2'))
        assert status.overall == ClusterSeverity.CRITICAL
        assert status.message == 'Partner down detected'
        assert 'server1' in status.details

    def test_partner_down_beats_healthy_state(self):
        status = _reduce(_up('server1', 'partner-down'), _up('server2', 'hot-standby'))
        assert status.overall == ClusterSeverity.CRITICAL

    def test_hot_standby_pair_is_healthy(self):
        status = _reduce(_up('server1', 'hot-standby'), _up('server2', 'hot-standby'))
        assert status.overall == ClusterSeverity.HEALTHY
        assert status.message == 'Cluster healthy: hot-standby'
        assert status.details is None

    def test_healthy_lists_each_state_once(self):
        status = _reduce(_up('server1', 'load-balancing'), _up('server2', 'backup'))
        assert status.overall == ClusterSeverity.HEALTHY
        assert status.message == 'Cluster healthy: load-balancing, backup'

    def test_transition_state_is_warning(self):
        status = _reduce(_up('server1', 'syncing'), _up('server2', 'waiting'))
        assert status.overall == ClusterSeverity.WARNING
        assert status.message == 'Cluster in transition or unknown state'
        assert 'syncing' in status.details

    def test_no_states_is_warning(self):
        status = _reduce(_up('server1', None), _up('server2', None))
        assert status.overall == ClusterSeverity.WARNING
        assert status.message == 'No HA states detected'

    def test_healthy_with_unreachable_peer_is_warning(self):
        status = _reduce(_up('server1', 'hot-standby'), _down('server2'))
        assert status.overall == ClusterSeverity.WARNING
        assert status.message == 'Cluster healthy: hot-standby (1 node(s) not responding)'
        assert status.details == 'Unreachable: server2'

    def test_healthy_with_unsent_updates_is_warning(self):
        status = _reduce(_up('server1', 'hot-standby', unsent=12), _up('server2', 'hot-standby', unsent=3))
        assert status.overall == ClusterSeverity.WARNING
        assert status.message == 'Cluster healthy: hot-standby (12 unsent updates)'

    def test_unreachable_reported_before_unsent_updates(self):
        status = _reduce(_up('server1', 'hot-standby', unsent=5), _down('server2'))
        assert 'not responding' in status.message
        assert 'unsent' not in status.message

    def test_unsent_updates_do_not_adjust_warning(self):
        status = _reduce(_up('server1', 'syncing', unsent=5), _up('server2', 'ready'))
        assert status.message == 'Cluster in transition or unknown state'

    def test_output_carries_node_detail(self):
        status = _reduce(_up('server1', 'hot-standby'), _down('server2'))
        assert set(status.nodes) == {'server1', 'server2'}
        assert status.nodes['server2'].error == 'connection refused'
        assert status.checked_at == CHECKED_AT
        assert status.reachable_count == 1


class TestProbeCluster:
    """Test concurrent heartbeat probing."""

    @pytest.mark.asyncio
    async def test_both_nodes_probed(self):
        source = FakeHeartbeats({'server1': 'hot-standby', 'server2': 'hot-standby'})
        nodes = await probe_cluster(source, ['server1', 'server2'], timeout=1)

        assert sorted(source.calls) == ['server1', 'server2']
        assert all(node.reachable for node in nodes.values())

    @pytest.mark.asyncio
    async def test_failure_becomes_unreachable_record(self):
        source = FakeHeartbeats(
            {'server1': 'hot-standby', 'server2': UnreachableError('Request to Kea failed')}
        )
        nodes = await probe_cluster(source, ['server1', 'server2'], timeout=1)

        assert nodes['server1'].reachable
        assert not nodes['server2'].reachable
        assert 'Request to Kea failed' in nodes['server2'].error

    @pytest.mark.asyncio
    async def test_timeout_becomes_unreachable_record(self):
        source = FakeHeartbeats({'slow': 0.5})
        node = await probe_node(source, 'slow', timeout=0.01)

        assert not node.reachable
        assert 'timed out' in node.error

    @pytest.mark.asyncio
    async def test_probes_run_concurrently(self):
        source = FakeHeartbeats({'server1': 0.2, 'server2': 0.2})
        loop = asyncio.get_running_loop()
        started = loop.time()
        await probe_cluster(source, ['server1', 'server2'], timeout=1)

        assert loop.time() - started < 0.39

    @pytest.mark.asyncio
    async def test_get_cluster_status(self):
        source = FakeHeartbeats({'server1': 'partner-down', 'server2': RuntimeError('boom')})
        status = await get_cluster_status(source, ['server1', 'server2'], timeout=1)

        assert status.overall == ClusterSeverity.CRITICAL
        assert status.message == 'Partner down detected'
