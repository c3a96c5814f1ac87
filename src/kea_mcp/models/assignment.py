"""Static IP assignment and reservation pool models."""

from datetime import datetime
from kea_mcp.utils.addresses import canonical_ip, collect_assignment_errors, normalize_mac
from kea_mcp.utils.errors import ValidationError
from pydantic import BaseModel, Field, model_validator
from typing import Literal


class AssignmentFields(BaseModel):
    """Write payload for a static IP assignment.

    Validation runs at construction and raises the tool-level
    ``ValidationError`` listing every problem found, so callers reject bad
    input before touching any inventory.
    """

    ip_address: str = Field(description='IPv4 address handed out manually')
    mac_address: str | None = Field(default=None, description='Link-layer identifier')
    hostname: str | None = Field(default=None, description='Host label')
    description: str | None = Field(default=None, description='Free-form note')

    @model_validator(mode='before')
    @classmethod
    def _validate_payload(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data

        data = {key: (value.strip() if isinstance(value, str) else value) for key, value in data.items()}
        for key in ('mac_address', 'hostname', 'description'):
            if data.get(key) == '':
                data[key] = None

        errors = collect_assignment_errors(
            data.get('ip_address'), data.get('mac_address'), data.get('hostname')
        )
        if errors:
            raise ValidationError('Validation failed', details=errors)

        data['ip_address'] = canonical_ip(data['ip_address'])
        if data.get('mac_address'):
            data['mac_address'] = normalize_mac(data['mac_address'])
        return data


class AddressAssignment(AssignmentFields):
    """A static IP assignment tracked outside the DHCP server."""

    id: str = Field(description='Store identifier')
    created_at: datetime = Field(description='When the assignment was created')
    updated_at: datetime = Field(description='When the assignment was last changed')


class PoolConfig(BaseModel):
    """Address range set aside for reservations."""

    id: int | None = Field(default=None, description='Store identifier (None when not stored)')
    name: str = Field(default='default', description='Pool name')
    start_ip: str = Field(description='First address of the pool')
    end_ip: str = Field(description='Last address of the pool')
    total: int = Field(description='Number of addresses in the pool')
    description: str | None = Field(default=None, description='Operator note')
    is_active: bool = Field(default=True, description='Whether this is the active pool')
    created_at: datetime | None = Field(default=None, description='Creation time')
    updated_at: datetime | None = Field(default=None, description='Last update time')
    source: Literal['store', 'environment', 'default'] = Field(
        default='store', description='Where this pool definition came from'
    )

    @property
    def range(self) -> str:
        return f'{self.start_ip} - {self.end_ip}'
