"""HA cluster health models."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ClusterSeverity(str, Enum):
    """Overall cluster verdict."""

    HEALTHY = 'healthy'
    WARNING = 'warning'
    CRITICAL = 'critical'


class HAState(str, Enum):
    """Operating states a Kea HA peer can report."""

    LOAD_BALANCING = 'load-balancing'
    HOT_STANDBY = 'hot-standby'
    BACKUP = 'backup'
    PARTNER_DOWN = 'partner-down'
    SYNCING = 'syncing'
    READY = 'ready'
    WAITING = 'waiting'
    TERMINATED = 'terminated'
    PASSIVE_BACKUP = 'passive-backup'
    COMMUNICATION_RECOVERY = 'communication-recovery'
    IN_MAINTENANCE = 'in-maintenance'
    PARTNER_IN_MAINTENANCE = 'partner-in-maintenance'


HEALTHY_STATES = frozenset(
    {HAState.HOT_STANDBY.value, HAState.LOAD_BALANCING.value, HAState.BACKUP.value}
)


class HeartbeatPayload(BaseModel):
    """Arguments of a successful ``ha-heartbeat`` response."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    state: str | None = Field(default=None, description='Operating state of the node')
    date_time: str | None = Field(default=None, alias='date-time', description='Node clock')
    scopes: list[str] = Field(default_factory=list, description='Scopes the node serves')
    unsent_update_count: int = Field(
        default=0, alias='unsent-update-count', description='Lease updates not yet sent to peer'
    )


class ClusterNodeStatus(BaseModel):
    """Outcome of one heartbeat probe."""

    name: str = Field(description='HA node name')
    reachable: bool = Field(description='Whether the heartbeat succeeded')
    state: str | None = Field(default=None, description='Reported operating state')
    date_time: str | None = Field(default=None, description='Node clock at probe time')
    scopes: list[str] = Field(default_factory=list, description='Scopes served')
    unsent_update_count: int = Field(default=0, description='Outstanding lease updates')
    error: str | None = Field(default=None, description='Failure detail when unreachable')
    checked_at: datetime = Field(description='When the probe completed')

    @classmethod
    def from_heartbeat(
        cls, name: str, payload: HeartbeatPayload, checked_at: datetime
    ) -> 'ClusterNodeStatus':
        return cls(
            name=name,
            reachable=True,
            state=payload.state,
            date_time=payload.date_time,
            scopes=payload.scopes,
            unsent_update_count=payload.unsent_update_count,
            checked_at=checked_at,
        )

    @classmethod
    def unreachable(cls, name: str, error: str, checked_at: datetime) -> 'ClusterNodeStatus':
        return cls(name=name, reachable=False, error=error, checked_at=checked_at)


class ClusterStatus(BaseModel):
    """Cluster-level verdict reduced from the per-node heartbeats."""

    overall: ClusterSeverity = Field(description='healthy, warning or critical')
    message: str = Field(description='Human-readable summary')
    details: str | None = Field(default=None, description='Extra context for the verdict')
    nodes: dict[str, ClusterNodeStatus] = Field(description='Raw per-node probe results')
    checked_at: datetime = Field(description='When the reduction ran')

    @property
    def reachable_count(self) -> int:
        return sum(1 for node in self.nodes.values() if node.reachable)
