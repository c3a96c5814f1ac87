"""Stores for static IP assignments and the active reservation pool."""

from kea_mcp.storage.base import AssignmentStore, PoolConfigStore
from kea_mcp.storage.json_store import JsonFileAssignmentStore, JsonFilePoolConfigStore
from kea_mcp.storage.memory import MemoryAssignmentStore, MemoryPoolConfigStore


__all__ = [
    'AssignmentStore',
    'JsonFileAssignmentStore',
    'JsonFilePoolConfigStore',
    'MemoryAssignmentStore',
    'MemoryPoolConfigStore',
    'PoolConfigStore',
]
