"""Active reservation pool: stored configuration with environment fallback."""

from kea_mcp.analysis.allocation import pool_size
from kea_mcp.config import Settings
from kea_mcp.models import PoolConfig, PoolValidation
from kea_mcp.storage import PoolConfigStore
from kea_mcp.utils.addresses import canonical_ip, is_valid_ipv4, same_slash24
from kea_mcp.utils.errors import ValidationError
from loguru import logger


RESERVATIONS_NOTE = 'Pool range can contain existing DHCP reservations'


def pool_range_errors(start_ip: str | None, end_ip: str | None) -> list[str]:
    """Every problem with a candidate pool range, empty when it can be stored."""
    if not start_ip or not end_ip:
        return ['start_ip and end_ip are required']
    if not is_valid_ipv4(start_ip) or not is_valid_ipv4(end_ip):
        return ['Invalid IP address format']

    errors = []
    if not same_slash24(start_ip, end_ip):
        errors.append('Start and end IP must share the same first three octets')
    elif pool_size(start_ip, end_ip) <= 0:
        errors.append('End IP must be greater than start IP')
    return errors


class PoolService:
    """Reads and writes the active reservation pool."""

    def __init__(self, settings: Settings, pools: PoolConfigStore):
        self.settings = settings
        self.pools = pools

    async def get_active(self) -> PoolConfig:
        """Stored active pool, or the configured fallback with a warning."""
        stored = await self.pools.get_active()
        if stored:
            return stored.model_copy(update={'source': 'store'})

        fallback = self.settings.reserved_pool
        logger.warning(
            f'No active pool configuration stored, using {fallback.source} range {fallback.range}'
        )
        return PoolConfig(
            start_ip=fallback.start_ip,
            end_ip=fallback.end_ip,
            total=fallback.total,
            description='Fallback reservation pool',
            source=fallback.source,
        )

    async def set(
        self,
        start_ip: str,
        end_ip: str,
        description: str | None = None,
        name: str = 'default',
    ) -> PoolConfig:
        errors = pool_range_errors(start_ip, end_ip)
        if errors:
            raise ValidationError('Invalid pool range', details=errors)

        return await self.pools.upsert_active(
            canonical_ip(start_ip), canonical_ip(end_ip), description=description, name=name
        )

    async def reset(self) -> int:
        """Remove the stored pool; the fallback applies again afterwards."""
        count = await self.pools.delete_active()
        logger.info(f'Pool configuration reset ({count} removed)')
        return count

    def validate(self, start_ip: str, end_ip: str) -> PoolValidation:
        """Check a candidate range without storing it.

        Reservations are not consulted; they may sit inside the pool range.
        """
        errors = pool_range_errors(start_ip, end_ip)
        if errors:
            return PoolValidation(valid=False, message='; '.join(errors), pool_size=0)

        return PoolValidation(
            valid=True,
            message='Pool configuration is valid',
            pool_size=pool_size(start_ip, end_ip),
            note=RESERVATIONS_NOTE,
        )
