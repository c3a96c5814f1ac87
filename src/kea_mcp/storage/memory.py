"""In-memory stores.

``MemoryAssignmentStore`` and ``MemoryPoolConfigStore`` keep their records
in a list; the JSON file stores reuse the same logic and only swap the
``_load``/``_save`` pair.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from kea_mcp.analysis.allocation import pool_size
from kea_mcp.analysis.conflicts import check_address_conflict, check_identifier_conflict
from kea_mcp.models import AddressAssignment, AssignmentFields, IdentifierExists, PoolConfig, StaticExists
from kea_mcp.utils.addresses import canonical_ip, normalize_mac
from kea_mcp.utils.errors import ConflictError, ErrorCodes, NotFoundError
from loguru import logger


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryAssignmentStore:
    """Static IP assignments held in process memory."""

    def __init__(self, records: list[AddressAssignment] | None = None):
        self._records: list[AddressAssignment] = list(records or [])
        self._lock = asyncio.Lock()

    async def _load(self) -> list[AddressAssignment]:
        return list(self._records)

    async def _save(self, records: list[AddressAssignment]) -> None:
        self._records = list(records)

    def _ensure_unique(
        self,
        records: list[AddressAssignment],
        fields: AssignmentFields,
        exclude_id: str | None = None,
    ) -> None:
        address = check_address_conflict(
            fields.ip_address, records, [], creating_static=False, exclude_id=exclude_id
        )
        if isinstance(address, StaticExists):
            raise ConflictError(
                f'IP address {fields.ip_address} is already assigned as a static IP',
                existing=address.existing,
            )

        identifier = check_identifier_conflict(fields.mac_address, records, exclude_id=exclude_id)
        if isinstance(identifier, IdentifierExists):
            raise ConflictError(
                f'MAC address {fields.mac_address} is already assigned to another static IP',
                existing=identifier.existing,
                error_code=ErrorCodes.IDENTIFIER_CONFLICT,
            )

    async def list_all(self) -> list[AddressAssignment]:
        records = await self._load()
        return sorted(records, key=lambda record: tuple(int(o) for o in record.ip_address.split('.')))

    async def get(self, assignment_id: str) -> AddressAssignment:
        for record in await self._load():
            if record.id == assignment_id:
                return record
        raise NotFoundError(f'No static IP with ID {assignment_id}')

    async def get_by_address(self, ip_address: str) -> AddressAssignment | None:
        wanted = canonical_ip(ip_address)
        return next((r for r in await self._load() if r.ip_address == wanted), None)

    async def get_by_identifier(self, mac_address: str) -> AddressAssignment | None:
        wanted = normalize_mac(mac_address)
        if not wanted:
            return None
        return next((r for r in await self._load() if r.mac_address == wanted), None)

    async def create(self, fields: AssignmentFields) -> AddressAssignment:
        async with self._lock:
            records = await self._load()
            self._ensure_unique(records, fields)

            now = _utcnow()
            record = AddressAssignment(
                id=uuid.uuid4().hex,
                created_at=now,
                updated_at=now,
                **fields.model_dump(),
            )
            records.append(record)
            await self._save(records)

        logger.debug(f'Stored static IP {record.ip_address} ({record.id})')
        return record

    async def update(self, assignment_id: str, fields: AssignmentFields) -> AddressAssignment:
        async with self._lock:
            records = await self._load()
            index = next((i for i, r in enumerate(records) if r.id == assignment_id), None)
            if index is None:
                raise NotFoundError(f'No static IP with ID {assignment_id}')

            self._ensure_unique(records, fields, exclude_id=assignment_id)

            current = records[index]
            records[index] = AddressAssignment(
                id=current.id,
                created_at=current.created_at,
                updated_at=_utcnow(),
                **fields.model_dump(),
            )
            await self._save(records)
            return records[index]

    async def delete(self, assignment_id: str) -> AddressAssignment:
        async with self._lock:
            records = await self._load()
            index = next((i for i, r in enumerate(records) if r.id == assignment_id), None)
            if index is None:
                raise NotFoundError(f'No static IP with ID {assignment_id}')

            removed = records.pop(index)
            await self._save(records)
            return removed

    async def delete_all(self) -> int:
        async with self._lock:
            count = len(await self._load())
            await self._save([])
            return count

    async def count(self) -> int:
        return len(await self._load())


class MemoryPoolConfigStore:
    """Active reservation pool held in process memory."""

    def __init__(self, active: PoolConfig | None = None):
        self._active = active
        self._next_id = (active.id or 0) + 1 if active else 1
        self._lock = asyncio.Lock()

    async def _load(self) -> PoolConfig | None:
        return self._active

    async def _save(self, pool: PoolConfig | None) -> None:
        self._active = pool

    async def get_active(self) -> PoolConfig | None:
        return await self._load()

    async def upsert_active(
        self,
        start_ip: str,
        end_ip: str,
        description: str | None = None,
        name: str = 'default',
    ) -> PoolConfig:
        async with self._lock:
            existing = await self._load()
            now = _utcnow()
            total = pool_size(start_ip, end_ip)

            if existing:
                pool = existing.model_copy(
                    update={
                        'name': name,
                        'start_ip': start_ip,
                        'end_ip': end_ip,
                        'total': total,
                        'description': description,
                        'updated_at': now,
                    }
                )
                logger.info(f'Updated active pool {pool.id}: {pool.range} ({total} IPs)')
            else:
                pool = PoolConfig(
                    id=self._next_pool_id(),
                    name=name,
                    start_ip=start_ip,
                    end_ip=end_ip,
                    total=total,
                    description=description,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                )
                logger.info(f'Created active pool {pool.id}: {pool.range} ({total} IPs)')

            await self._save(pool)
            return pool

    def _next_pool_id(self) -> int:
        pool_id = self._next_id
        self._next_id += 1
        return pool_id

    async def delete_active(self) -> int:
        async with self._lock:
            existing = await self._load()
            await self._save(None)
            return 1 if existing else 0
