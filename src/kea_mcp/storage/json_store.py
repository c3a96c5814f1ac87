"""JSON file backed stores under the configured data directory.

Writes go to a temporary file that is then renamed over the target, so a
crash mid-write leaves the previous file intact. File access runs in a
worker thread off the event loop.
"""

import asyncio
import json
import os
from kea_mcp.models import AddressAssignment, PoolConfig
from kea_mcp.storage.memory import MemoryAssignmentStore, MemoryPoolConfigStore
from kea_mcp.utils.errors import ErrorCodes, ToolError
from loguru import logger
from pathlib import Path
from typing import Any


ASSIGNMENTS_FILE = 'static_ips.json'
POOL_CONFIG_FILE = 'pool_config.json'


def _read_json(path: Path) -> Any:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        raise ToolError(
            message=f'Cannot read store file {path}: {e}',
            error_code=ErrorCodes.CONFIG_INVALID,
            suggestion='Fix or remove the file; it is recreated on the next write',
        ) from e


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + '.tmp')
    tmp_path.write_text(json.dumps(data, indent=2), encoding='utf-8')
    os.replace(tmp_path, path)


class JsonFileAssignmentStore(MemoryAssignmentStore):
    """Static IP assignments persisted to ``<data_dir>/static_ips.json``."""

    def __init__(self, data_dir: Path):
        super().__init__()
        self.path = Path(data_dir) / ASSIGNMENTS_FILE

    async def _load(self) -> list[AddressAssignment]:
        data = await asyncio.to_thread(_read_json, self.path) or {}
        return [AddressAssignment.model_validate(item) for item in data.get('assignments', [])]

    async def _save(self, records: list[AddressAssignment]) -> None:
        payload = {'assignments': [r.model_dump(mode='json') for r in records]}
        await asyncio.to_thread(_write_json, self.path, payload)
        logger.debug(f'Wrote {len(records)} static IPs to {self.path}')


class JsonFilePoolConfigStore(MemoryPoolConfigStore):
    """Active pool persisted to ``<data_dir>/pool_config.json``."""

    def __init__(self, data_dir: Path):
        super().__init__()
        self.path = Path(data_dir) / POOL_CONFIG_FILE

    async def _load(self) -> PoolConfig | None:
        data = await asyncio.to_thread(_read_json, self.path) or {}
        self._next_id = data.get('next_id', 1)
        active = data.get('active')
        return PoolConfig.model_validate(active) if active else None

    async def _save(self, pool: PoolConfig | None) -> None:
        await asyncio.to_thread(
            _write_json,
            self.path,
            {
                'next_id': self._next_id,
                'active': pool.model_dump(mode='json') if pool else None,
            },
        )
