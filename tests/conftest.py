"""Shared fixtures: settings, sample inventories and a fake Kea Control Agent."""

import pytest
from factories import FakeKea, make_assignment, make_host, make_lease
from kea_mcp.config import ReservedPool, Settings
from kea_mcp.context import ServerContext, set_context
from kea_mcp.models import AddressAssignment, Lease, Reservation
from kea_mcp.storage import MemoryAssignmentStore, MemoryPoolConfigStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at the fake Control Agent and a temporary data dir."""
    return Settings(
        kea_url='http://kea.test:8000',
        subnet_id=1,
        lease_scope_total=200,
        ha_nodes=('server1', 'server2'),
        heartbeat_timeout=5,
        data_dir=tmp_path,
        reserved_pool=ReservedPool(),
    )


@pytest.fixture
def fake_kea() -> FakeKea:
    return FakeKea()


@pytest.fixture
def sample_mac() -> str:
    """Sample MAC address for testing."""
    return 'aa:bb:cc:dd:ee:ff'


@pytest.fixture
def sample_ip() -> str:
    """Sample IP address for testing."""
    return '192.168.1.10'


@pytest.fixture
def sample_leases() -> list[Lease]:
    return [
        Lease.model_validate(make_lease('192.168.1.150', 'aa:bb:cc:00:00:10', 'laptop')),
        Lease.model_validate(make_lease('192.168.1.151', 'aa:bb:cc:00:00:11', state=2)),
    ]


@pytest.fixture
def sample_reservations() -> list[Reservation]:
    return [
        Reservation.model_validate(make_host('192.168.1.20', 'aa:bb:cc:00:00:20', 'printer')),
        Reservation.model_validate(make_host('192.168.1.21', 'aa:bb:cc:00:00:21')),
    ]


@pytest.fixture
def sample_assignments() -> list[AddressAssignment]:
    return [
        make_assignment('192.168.1.5', 'static-1', mac='aa:bb:cc:00:00:05', hostname='nas'),
        make_assignment('192.168.1.6', 'static-2'),
    ]


@pytest.fixture
def server_context(settings, fake_kea):
    """Install an in-memory context wired to the fake Control Agent."""
    context = ServerContext(
        settings=settings,
        assignments=MemoryAssignmentStore(),
        pools=MemoryPoolConfigStore(),
        transport=fake_kea.transport,
    )
    set_context(context)
    yield context
    set_context(None)


# Pytest markers for test organization
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        'markers',
        'live: marks tests that require a live Kea Control Agent',
    )
    config.addinivalue_line('markers', 'slow: marks tests that take longer than 5 seconds')
    config.addinivalue_line('markers', 'integration: marks tests that test component integration')
