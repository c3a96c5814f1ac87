"""Store contracts for static assignments and the active pool configuration."""

from kea_mcp.models import AddressAssignment, AssignmentFields, PoolConfig
from typing import Protocol


class AssignmentStore(Protocol):
    """Static IP assignments; address and MAC are each unique across records."""

    async def list_all(self) -> list[AddressAssignment]: ...

    async def get(self, assignment_id: str) -> AddressAssignment:
        """Raises NotFoundError."""
        ...

    async def get_by_address(self, ip_address: str) -> AddressAssignment | None: ...

    async def get_by_identifier(self, mac_address: str) -> AddressAssignment | None: ...

    async def create(self, fields: AssignmentFields) -> AddressAssignment:
        """Raises ConflictError if the address or MAC is already stored."""
        ...

    async def update(self, assignment_id: str, fields: AssignmentFields) -> AddressAssignment:
        """Raises NotFoundError, or ConflictError against other records."""
        ...

    async def delete(self, assignment_id: str) -> AddressAssignment:
        """Raises NotFoundError; returns the removed record."""
        ...

    async def delete_all(self) -> int: ...

    async def count(self) -> int: ...


class PoolConfigStore(Protocol):
    """Holds at most one active pool; there is deliberately no plain insert."""

    async def get_active(self) -> PoolConfig | None: ...

    async def upsert_active(
        self,
        start_ip: str,
        end_ip: str,
        description: str | None = None,
        name: str = 'default',
    ) -> PoolConfig:
        """Update the active pool if one exists, else create it."""
        ...

    async def delete_active(self) -> int: ...
