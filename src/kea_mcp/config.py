"""Configuration for the Kea MCP server.

Settings are read from the process environment exactly once, at server
start, and then passed explicitly to every service.
"""

import os
from dotenv import load_dotenv
from kea_mcp.analysis.allocation import WIDE_RANGE_SIZE, compute_ip_range_size
from kea_mcp.utils.addresses import is_valid_ipv4
from kea_mcp.utils.errors import ValidationError
from loguru import logger
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from typing import Literal


DEFAULT_POOL_START = '192.168.1.2'
DEFAULT_POOL_END = '192.168.1.100'


class ReservedPool(BaseModel):
    """Reservation pool used when no pool configuration has been stored."""

    start_ip: str = Field(default=DEFAULT_POOL_START, description='First address of the pool')
    end_ip: str = Field(default=DEFAULT_POOL_END, description='Last address of the pool')
    total: int = Field(default=99, description='Number of addresses in the pool')
    source: Literal['environment', 'default'] = Field(
        default='default', description='Where the range came from'
    )

    @property
    def range(self) -> str:
        return f'{self.start_ip} - {self.end_ip}'

    @classmethod
    def parse(cls, value: str | None, total_override: str | None = None) -> 'ReservedPool':
        """Parse a ``"start_ip - end_ip"`` range.

        A missing value selects the built-in default and logs a warning; a
        malformed value raises ``ValidationError``.
        """
        if not value:
            logger.warning('RESERVED_POOL not configured, using defaults')
            return cls()

        parts = [part.strip() for part in value.split(' - ')]
        if len(parts) != 2 or not all(is_valid_ipv4(part) for part in parts):
            raise ValidationError(
                'Invalid RESERVED_POOL configuration',
                details=['Expected format: "start_ip - end_ip"'],
            )

        start_ip, end_ip = parts
        try:
            total = int(total_override) if total_override else 0
        except ValueError:
            total = 0
        if not total:
            total = compute_ip_range_size(start_ip, end_ip)
        if total > WIDE_RANGE_SIZE:
            logger.warning(
                f'RESERVED_POOL {start_ip} - {end_ip} spans {total} addresses; '
                'next-free scans over it run in a worker thread'
            )

        logger.info(f'Reserved pool configured: {start_ip} - {end_ip} ({total} IPs)')
        return cls(start_ip=start_ip, end_ip=end_ip, total=total, source='environment')


class Settings(BaseModel):
    """Kea control agent connection and inventory settings."""

    kea_url: str = Field(default='http://127.0.0.1:8000', description='Kea Control Agent URL')
    username: str | None = Field(default=None, description='HTTP basic auth user')
    password: str | None = Field(default=None, description='HTTP basic auth password', repr=False)
    verify_ssl: bool = Field(default=False, description='Verify TLS certificates')
    timeout: float = Field(default=10.0, description='Per-request timeout in seconds')
    service: str = Field(default='dhcp4', description='Kea service addressed by commands')
    subnet_id: int = Field(default=1, description='Subnet the inventory tools operate on')
    lease_scope_total: int = Field(default=200, description='Lease scope size for statistics')
    ha_nodes: tuple[str, str] = Field(
        default=('server1', 'server2'), description='Names of the two HA peers'
    )
    heartbeat_timeout: float = Field(default=5.0, description='Per-node heartbeat timeout')
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / '.kea-mcp',
        description='Directory holding the assignment and pool stores',
    )
    reserved_pool: ReservedPool = Field(default_factory=ReservedPool)
    log_level: str = Field(default='INFO', description='loguru level')

    @field_validator('kea_url')
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.startswith(('http://', 'https://')):
            raise ValueError('kea_url must start with http:// or https://')
        return value.rstrip('/')

    @field_validator('timeout', 'heartbeat_timeout')
    @classmethod
    def _clamp_timeout(cls, value: float) -> float:
        return max(1.0, min(value, 300.0))

    @field_validator('ha_nodes', mode='before')
    @classmethod
    def _split_nodes(cls, value: object) -> object:
        if isinstance(value, str):
            value = tuple(name.strip() for name in value.split(',') if name.strip())
        if isinstance(value, (list, tuple)) and len(set(value)) != len(value):
            raise ValueError('HA node names must be distinct')
        return value

    @property
    def has_auth(self) -> bool:
        return bool(self.username and self.password)

    @classmethod
    def from_env(cls, env_file: str | None = '.env') -> 'Settings':
        """Load settings from environment variables (and an optional .env file).

        Supports:
        - KEA_URL, KEA_USERNAME, KEA_PASSWORD, KEA_VERIFY_SSL, KEA_TIMEOUT
        - KEA_SUBNET_ID, KEA_LEASE_SCOPE_TOTAL
        - KEA_HA_NODES (comma separated), KEA_HEARTBEAT_TIMEOUT
        - KEA_DATA_DIR, RESERVED_POOL, RESERVED_POOL_TOTAL, KEA_MCP_LOG_LEVEL
        """
        if env_file and Path(env_file).exists():
            load_dotenv(env_file)

        env = os.environ
        if 'KEA_URL' not in env:
            logger.warning('KEA_URL not set, using http://127.0.0.1:8000')

        try:
            settings = cls(
                kea_url=env.get('KEA_URL', 'http://127.0.0.1:8000'),
                username=env.get('KEA_USERNAME'),
                password=env.get('KEA_PASSWORD'),
                verify_ssl=env.get('KEA_VERIFY_SSL', 'false').lower() == 'true',
                timeout=float(env.get('KEA_TIMEOUT', '10')),
                subnet_id=int(env.get('KEA_SUBNET_ID', '1')),
                lease_scope_total=int(env.get('KEA_LEASE_SCOPE_TOTAL', '200')),
                ha_nodes=env.get('KEA_HA_NODES', 'server1,server2'),
                heartbeat_timeout=float(env.get('KEA_HEARTBEAT_TIMEOUT', '5')),
                data_dir=Path(env.get('KEA_DATA_DIR', str(Path.home() / '.kea-mcp'))).expanduser(),
                reserved_pool=ReservedPool.parse(
                    env.get('RESERVED_POOL'), env.get('RESERVED_POOL_TOTAL')
                ),
                log_level=env.get('KEA_MCP_LOG_LEVEL', 'INFO').upper(),
            )
        except ValueError as e:
            # pydantic's ValidationError is a ValueError subclass
            raise ValidationError(
                'Invalid Kea MCP configuration',
                details=[str(e)],
                suggestion='Check KEA_* environment variables',
            ) from e

        logger.info(
            'Configuration loaded',
            kea_url=settings.kea_url,
            subnet_id=settings.subnet_id,
            ha_nodes=list(settings.ha_nodes),
            reserved_pool=settings.reserved_pool.range,
        )
        return settings


