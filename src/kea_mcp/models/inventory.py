"""Pydantic models for inventory reconciliation results."""

from kea_mcp.models.assignment import AddressAssignment
from kea_mcp.models.dhcp import Lease, Reservation
from pydantic import BaseModel, Field
from typing import Annotated, Literal


# =============================================================================
# Capacity Models
# =============================================================================


UtilizationStatus = Literal['Low', 'Moderate', 'Good']


class PoolUtilization(BaseModel):
    """Capacity of the reservation pool across reservations and static assignments."""

    pool_range: str = Field(description='Pool range "start - end"')
    total: int = Field(description='Addresses in the pool')
    reserved_count: int = Field(description='DHCP reservations counted against the pool')
    static_count: int = Field(description='Static assignments counted against the pool')
    used_count: int = Field(description='reserved_count + static_count')
    available_count: int = Field(description='total - used_count (negative means overcommitted)')
    status: UtilizationStatus = Field(description='Low, Moderate or Good headroom')


class LeaseStatistics(BaseModel):
    """Active lease counts for one subnet."""

    subnet_id: int = Field(description='Subnet the statistics cover')
    total: int = Field(description='Lease scope size')
    active: int = Field(description='Active leases in the subnet')
    available: int = Field(description='total - active')
    status: UtilizationStatus = Field(description='Low, Moderate or Good headroom')


class AssignmentStatistics(BaseModel):
    """Field coverage across static assignments."""

    total: int = Field(description='Number of static assignments')
    with_mac: int = Field(description='Assignments with a MAC address')
    with_hostname: int = Field(description='Assignments with a hostname')
    with_description: int = Field(description='Assignments with a description')


class EnrichedReservation(BaseModel):
    """Reservation annotated with its current lease, if any."""

    reservation: Reservation = Field(description='The DHCP reservation')
    is_active: bool = Field(description='An active lease holds the reserved address')
    lease: Lease | None = Field(default=None, description='Matching lease')
    expires_in: str | None = Field(default=None, description='Formatted time to lease expiry')


class NextAvailableAddress(BaseModel):
    """Result of a next-free-address scan."""

    ip_address: str = Field(description='First unused address in the range')
    subnet_id: int = Field(description='Subnet scanned')
    pool_range: str = Field(description='Range scanned')
    occupied_count: int = Field(description='Addresses excluded from the scan')


class PoolValidation(BaseModel):
    """Outcome of validating a candidate pool range."""

    valid: bool = Field(description='Whether the range can be stored')
    message: str = Field(description='Validation summary')
    pool_size: int = Field(description='Size of the candidate range')
    conflicts: list[str] = Field(default_factory=list, description='Conflicting addresses')
    note: str | None = Field(default=None, description='Additional policy note')


class StaticIPCheck(BaseModel):
    """Whether an address is already held by a static assignment."""

    ip_address: str = Field(description='Address checked')
    exists: bool = Field(description='True if a static assignment holds it')
    assignment: AddressAssignment | None = Field(default=None, description='The holder')


class InventoryMatch(BaseModel):
    """One search hit across the three inventories."""

    source: Literal['lease', 'reservation', 'static'] = Field(description='Inventory of origin')
    ip_address: str = Field(description='Matched address')
    mac_address: str | None = Field(default=None, description='Matched MAC')
    hostname: str | None = Field(default=None, description='Matched hostname')


# =============================================================================
# Conflict Models
# =============================================================================


class NoConflict(BaseModel):
    kind: Literal['no-conflict'] = 'no-conflict'


class StaticExists(BaseModel):
    """Address already held by another static assignment."""

    kind: Literal['static-exists'] = 'static-exists'
    existing: AddressAssignment


class ReservationExists(BaseModel):
    """Address already reserved on the DHCP server."""

    kind: Literal['dhcp-reservation-exists'] = 'dhcp-reservation-exists'
    existing: Reservation


class IdentifierExists(BaseModel):
    """MAC already bound to another static assignment."""

    kind: Literal['identifier-exists'] = 'identifier-exists'
    existing: AddressAssignment


ConflictResult = Annotated[
    NoConflict | StaticExists | ReservationExists | IdentifierExists,
    Field(discriminator='kind'),
]
