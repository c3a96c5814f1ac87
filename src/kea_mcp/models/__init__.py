"""Pydantic models for the Kea MCP server."""

from kea_mcp.models.assignment import AddressAssignment, AssignmentFields, PoolConfig
from kea_mcp.models.cluster import (
    HEALTHY_STATES,
    ClusterNodeStatus,
    ClusterSeverity,
    ClusterStatus,
    HAState,
    HeartbeatPayload,
)
from kea_mcp.models.dhcp import (
    CommandFailure,
    CommandResult,
    CommandSuccess,
    Lease,
    Reservation,
    parse_command_result,
)
from kea_mcp.models.inventory import (
    AssignmentStatistics,
    ConflictResult,
    EnrichedReservation,
    IdentifierExists,
    InventoryMatch,
    LeaseStatistics,
    NextAvailableAddress,
    NoConflict,
    PoolUtilization,
    PoolValidation,
    ReservationExists,
    StaticExists,
    StaticIPCheck,
)


__all__ = [
    'HEALTHY_STATES',
    'AddressAssignment',
    'AssignmentFields',
    'AssignmentStatistics',
    'ClusterNodeStatus',
    'ClusterSeverity',
    'ClusterStatus',
    'CommandFailure',
    'CommandResult',
    'CommandSuccess',
    'ConflictResult',
    'EnrichedReservation',
    'HAState',
    'HeartbeatPayload',
    'IdentifierExists',
    'InventoryMatch',
    'Lease',
    'LeaseStatistics',
    'NextAvailableAddress',
    'NoConflict',
    'PoolConfig',
    'PoolUtilization',
    'PoolValidation',
    'Reservation',
    'ReservationExists',
    'StaticExists',
    'StaticIPCheck',
    'parse_command_result',
]
