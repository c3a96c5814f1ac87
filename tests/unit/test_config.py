"""Unit tests for settings and the fallback reservation pool."""

import os
import pydantic
import pytest
from kea_mcp.config import ReservedPool, Settings
from kea_mcp.utils.errors import ValidationError
from pathlib import Path
from unittest.mock import patch


class TestReservedPool:
    """Test RESERVED_POOL parsing."""

    def test_missing_value_uses_default(self):
        pool = ReservedPool.parse(None)
        assert pool.start_ip == '192.168.1.2'
        assert pool.end_ip == '192.168.1.100'
        assert pool.total == 99
        assert pool.source == 'default'

    def test_range_total_is_computed(self):
        pool = ReservedPool.parse('10.0.0.10 - 10.0.0.20')
        assert pool.range == '10.0.0.10 - 10.0.0.20'
        assert pool.total == 11
        assert pool.source == 'environment'

    def test_range_across_octets_uses_full_size(self):
        pool = ReservedPool.parse('10.0.0.250 - 10.0.1.4')
        assert pool.total == 11

    def test_explicit_total_wins(self):
        pool = ReservedPool.parse('10.0.0.10 - 10.0.0.20', total_override='50')
        assert pool.total == 50

    def test_unparseable_total_is_ignored(self):
        pool = ReservedPool.parse('10.0.0.10 - 10.0.0.20', total_override='many')
        assert pool.total == 11

    def test_inverted_range_has_zero_total(self):
        assert ReservedPool.parse('10.0.0.20 - 10.0.0.10').total == 0

    def test_wide_range_logs_warning(self):
        with patch('kea_mcp.config.logger') as mock_logger:
            pool = ReservedPool.parse('10.0.0.1 - 10.255.255.254')

        assert pool.total == 16_777_214
        mock_logger.warning.assert_called_once()
        assert 'spans 16777214 addresses' in mock_logger.warning.call_args.args[0]

    def test_single_subnet_range_does_not_warn(self):
        with patch('kea_mcp.config.logger') as mock_logger:
            ReservedPool.parse('10.0.0.1 - 10.0.0.254')

        mock_logger.warning.assert_not_called()

    @pytest.mark.parametrize('value', ['10.0.0.10', '10.0.0.10-10.0.0.20', '10.0.0.10 - nope'])
    def test_malformed_value_raises(self, value):
        with pytest.raises(ValidationError) as exc_info:
            ReservedPool.parse(value)
        assert 'start_ip - end_ip' in exc_info.value.message


class TestSettings:
    """Test Settings validation."""

    def test_defaults(self):
        settings = Settings()
        assert settings.kea_url == 'http://127.0.0.1:8000'
        assert settings.service == 'dhcp4'
        assert settings.ha_nodes == ('server1', 'server2')
        assert settings.has_auth is False

    def test_url_trailing_slash_stripped(self):
        assert Settings(kea_url='https://kea.example:8000/').kea_url == 'https://kea.example:8000'

    def test_url_requires_http_scheme(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(kea_url='kea.example:8000')

    def test_timeouts_are_clamped(self):
        settings = Settings(timeout=0.1, heartbeat_timeout=1000)
        assert settings.timeout == 1.0
        assert settings.heartbeat_timeout == 300.0

    def test_ha_nodes_from_string(self):
        assert Settings(ha_nodes='alpha, beta').ha_nodes == ('alpha', 'beta')

    def test_ha_nodes_needs_two_names(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(ha_nodes='alpha')

    @pytest.mark.parametrize('nodes', ['kea1,kea1', ('kea1', 'kea1')])
    def test_ha_nodes_must_be_distinct(self, nodes):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            Settings(ha_nodes=nodes)
        assert 'must be distinct' in str(exc_info.value)

    def test_auth_requires_both_values(self):
        assert Settings(username='admin').has_auth is False
        assert Settings(username='admin', password='pw').has_auth is True  # pragma: allowlist secret

    def test_password_not_in_repr(self):
        settings = Settings(username='admin', password='hunter2')  # pragma: allowlist secret
        assert 'hunter2' not in repr(settings)


class TestSettingsFromEnv:
    """Test loading settings from environment variables."""

    def test_from_env(self, tmp_path):
        env = {
            'KEA_URL': 'http://kea-ctrl:8000',
            'KEA_USERNAME': 'admin',
            'KEA_PASSWORD': 'secret',  # pragma: allowlist secret
            'KEA_VERIFY_SSL': 'true',
            'KEA_TIMEOUT': '20',
            'KEA_SUBNET_ID': '7',
            'KEA_LEASE_SCOPE_TOTAL': '150',
            'KEA_HA_NODES': 'kea1,kea2',
            'KEA_HEARTBEAT_TIMEOUT': '3',
            'KEA_DATA_DIR': str(tmp_path),
            'RESERVED_POOL': '10.1.1.10 - 10.1.1.59',
            'KEA_MCP_LOG_LEVEL': 'debug',
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env(env_file=None)

        assert settings.kea_url == 'http://kea-ctrl:8000'
        assert settings.has_auth is True
        assert settings.verify_ssl is True
        assert settings.timeout == 20.0
        assert settings.subnet_id == 7
        assert settings.lease_scope_total == 150
        assert settings.ha_nodes == ('kea1', 'kea2')
        assert settings.heartbeat_timeout == 3.0
        assert settings.data_dir == Path(tmp_path)
        assert settings.reserved_pool.total == 50
        assert settings.log_level == 'DEBUG'

    def test_from_env_defaults(self, tmp_path):
        with patch.dict(os.environ, {'KEA_DATA_DIR': str(tmp_path)}, clear=True):
            settings = Settings.from_env(env_file=None)

        assert settings.kea_url == 'http://127.0.0.1:8000'
        assert settings.reserved_pool.source == 'default'

    def test_from_env_reads_dotenv(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('KEA_SUBNET_ID=42\n')
        with patch.dict(os.environ, {'KEA_DATA_DIR': str(tmp_path)}, clear=True):
            settings = Settings.from_env(env_file=str(env_file))

        assert settings.subnet_id == 42

    def test_from_env_invalid_number(self, tmp_path):
        with patch.dict(os.environ, {'KEA_SUBNET_ID': 'one', 'KEA_DATA_DIR': str(tmp_path)}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings.from_env(env_file=None)
        assert exc_info.value.suggestion == 'Check KEA_* environment variables'

    def test_from_env_malformed_pool(self, tmp_path):
        env = {'RESERVED_POOL': 'not a range', 'KEA_DATA_DIR': str(tmp_path)}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError):
                Settings.from_env(env_file=None)

    def test_from_env_duplicate_ha_nodes(self, tmp_path):
        env = {'KEA_HA_NODES': 'server1,server1', 'KEA_DATA_DIR': str(tmp_path)}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings.from_env(env_file=None)
        assert 'must be distinct' in exc_info.value.message
