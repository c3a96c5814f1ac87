"""Process-wide server context.

Settings are read from the environment once, the first time a tool needs
them, and the stores are opened against the configured data directory.
Tests swap the whole context with ``set_context``.
"""

import httpx
from dataclasses import dataclass, field
from kea_mcp.config import Settings
from kea_mcp.storage import (
    AssignmentStore,
    JsonFileAssignmentStore,
    JsonFilePoolConfigStore,
    PoolConfigStore,
)
from kea_mcp.utils.client import KeaClient


@dataclass
class ServerContext:
    """Settings and stores shared by every tool call."""

    settings: Settings
    assignments: AssignmentStore
    pools: PoolConfigStore
    transport: httpx.AsyncBaseTransport | None = field(default=None)

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ServerContext':
        return cls(
            settings=settings,
            assignments=JsonFileAssignmentStore(settings.data_dir),
            pools=JsonFilePoolConfigStore(settings.data_dir),
        )

    def client(self) -> KeaClient:
        """New Kea client; use as ``async with context.client() as client``."""
        return KeaClient(self.settings, transport=self.transport)


_context: ServerContext | None = None


def get_context() -> ServerContext:
    global _context
    if _context is None:
        _context = ServerContext.from_settings(Settings.from_env())
    return _context


def set_context(context: ServerContext | None) -> None:
    global _context
    _context = context
