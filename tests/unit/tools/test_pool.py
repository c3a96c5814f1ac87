"""Unit tests for pool configuration tools."""

import pytest
from kea_mcp.tools.pool import (
    get_pool_config,
    reset_pool_config,
    set_pool_config,
    validate_pool_config,
)
from kea_mcp.utils.errors import ValidationError
from unittest.mock import patch


@pytest.mark.asyncio
async def test_default_pool(server_context):
    pool = await get_pool_config()
    assert pool.source == 'default'
    assert pool.total == 99


@pytest.mark.asyncio
async def test_set_and_reset(server_context):
    pool = await set_pool_config('192.168.1.50', '192.168.1.99', description='printers')
    assert pool.total == 50
    assert (await get_pool_config()).source == 'store'

    result = await reset_pool_config()
    assert result['deleted'] == 1
    assert 'default range 192.168.1.2 - 192.168.1.100' in result['message']


@pytest.mark.asyncio
async def test_set_rejects_cross_subnet_range(server_context):
    with pytest.raises(ValidationError):
        await set_pool_config('192.168.1.50', '192.168.2.10')


@pytest.mark.asyncio
async def test_validate_does_not_store(server_context):
    result = await validate_pool_config('192.168.1.50', '192.168.1.99')

    assert result.valid
    assert result.pool_size == 50
    assert await server_context.pools.get_active() is None


@pytest.mark.asyncio
async def test_set_logs_start_and_end_under_one_correlation_id(server_context):
    with (
        patch('kea_mcp.tools.pool.config.log_tool_call', return_value='abc123') as call,
        patch('kea_mcp.tools.pool.config.log_tool_result') as result,
    ):
        await set_pool_config('192.168.1.50', '192.168.1.99')

    call.assert_called_once()
    assert result.call_args.kwargs['correlation_id'] == 'abc123'


@pytest.mark.asyncio
async def test_failed_set_logs_under_same_correlation_id(server_context):
    with (
        patch('kea_mcp.tools.pool.config.log_tool_call', return_value='def456'),
        patch('kea_mcp.tools.pool.config.log_tool_result') as result,
    ):
        with pytest.raises(ValidationError):
            await set_pool_config('192.168.1.50', '192.168.2.10')

    kwargs = result.call_args.kwargs
    assert kwargs['success'] is False
    assert kwargs['error'].startswith('Invalid pool range')
    assert kwargs['correlation_id'] == 'def456'
