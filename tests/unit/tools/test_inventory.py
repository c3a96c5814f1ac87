"""Unit tests for inventory tools."""

import pytest
from factories import make_host, make_lease
from kea_mcp.tools import inventory
from kea_mcp.tools.inventory import (
    get_ip_utilization,
    get_lease_statistics,
    get_next_available_ip,
    search_inventory,
)
from kea_mcp.utils.errors import NoAvailableAddressError


def test_inventory_init_exports():
    """Test that inventory __init__ exports all tools."""
    assert set(inventory.__all__) == {
        'get_ip_utilization',
        'get_lease_statistics',
        'get_next_available_ip',
        'search_inventory',
    }


@pytest.mark.asyncio
async def test_get_ip_utilization(server_context, fake_kea):
    fake_kea.hosts = [make_host('192.168.1.20'), make_host('192.168.1.21', mac='aa:bb:cc:00:00:21')]

    result = await get_ip_utilization()

    assert result.reserved_count == 2
    assert result.available_count == 97
    assert result.status == 'Good'


@pytest.mark.asyncio
async def test_get_next_available_ip(server_context, fake_kea):
    fake_kea.leases = [make_lease('192.168.1.2')]
    fake_kea.hosts = [make_host('192.168.1.3')]

    result = await get_next_available_ip()

    assert result.ip_address == '192.168.1.4'


@pytest.mark.asyncio
async def test_get_next_available_ip_exhausted(server_context, fake_kea):
    await server_context.pools.upsert_active('192.168.1.2', '192.168.1.2')
    fake_kea.hosts = [make_host('192.168.1.2')]

    with pytest.raises(NoAvailableAddressError):
        await get_next_available_ip()


@pytest.mark.asyncio
async def test_get_lease_statistics(server_context, fake_kea):
    fake_kea.leases = [make_lease('192.168.1.150')]

    stats = await get_lease_statistics()

    assert stats.active == 1
    assert stats.available == 199


@pytest.mark.asyncio
async def test_search_inventory(server_context, fake_kea):
    fake_kea.leases = [make_lease('192.168.1.150', hostname='laptop')]

    matches = await search_inventory('LAPTOP')

    assert [(m.source, m.ip_address) for m in matches] == [('lease', '192.168.1.150')]
