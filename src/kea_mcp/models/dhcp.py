"""Kea DHCP models: leases, reservations and command results."""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing import Annotated, Any, Literal


# Kea control channel result codes
RESULT_SUCCESS = 0
RESULT_ERROR = 1
RESULT_UNSUPPORTED = 2
RESULT_EMPTY = 3

# lease4 states
LEASE_STATE_DEFAULT = 0
LEASE_STATE_DECLINED = 1
LEASE_STATE_EXPIRED_RECLAIMED = 2


class Lease(BaseModel):
    """A DHCPv4 lease as reported by ``lease4-get-all``."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    ip_address: str = Field(alias='ip-address', description='Leased address')
    hw_address: str | None = Field(default=None, alias='hw-address', description='Client MAC')
    hostname: str | None = Field(default=None, description='Client hostname')
    cltt: int | None = Field(default=None, description='Client last transaction time (epoch)')
    valid_lft: int | None = Field(default=None, alias='valid-lft', description='Valid lifetime (s)')
    subnet_id: int | None = Field(default=None, alias='subnet-id', description='Subnet ID')
    state: int = Field(default=LEASE_STATE_DEFAULT, description='0 granted, 1 declined, 2 reclaimed')

    @property
    def expires_at(self) -> int | None:
        """Expiry as epoch seconds; independent of when the lease was polled."""
        if self.cltt is None or self.valid_lft is None:
            return None
        return self.cltt + self.valid_lft

    @property
    def expires_at_datetime(self) -> datetime | None:
        expires = self.expires_at
        return datetime.fromtimestamp(expires, tz=timezone.utc) if expires is not None else None

    @property
    def is_active(self) -> bool:
        return self.state == LEASE_STATE_DEFAULT


class Reservation(BaseModel):
    """A host reservation owned by the Kea server."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    reservation_id: int | None = Field(default=None, alias='host-id', description='Host ID if known')
    subnet_id: int = Field(alias='subnet-id', description='Subnet ID')
    ip_address: str = Field(alias='ip-address', description='Reserved address')
    hw_address: str | None = Field(default=None, alias='hw-address', description='Client MAC')
    hostname: str | None = Field(default=None, description='Reserved hostname')

    def to_kea(self) -> dict[str, Any]:
        """Serialize into the ``reservation`` argument Kea expects."""
        data: dict[str, Any] = {
            'subnet-id': self.subnet_id,
            'ip-address': self.ip_address,
        }
        if self.hw_address:
            data['hw-address'] = self.hw_address
        if self.hostname:
            data['hostname'] = self.hostname
        return data


class CommandSuccess(BaseModel):
    """Successful (or empty) command result."""

    status: Literal['success'] = 'success'
    command: str = Field(description='Command that produced this result')
    result: Literal[0, 3] = Field(description='0 = success, 3 = empty result set')
    text: str = Field(default='', description='Kea explanation text')
    arguments: dict[str, Any] = Field(default_factory=dict, description='Command payload')

    @property
    def is_empty(self) -> bool:
        return self.result == RESULT_EMPTY


class CommandFailure(BaseModel):
    """Failed command result."""

    status: Literal['failure'] = 'failure'
    command: str = Field(description='Command that produced this result')
    result: int = Field(description='Nonzero Kea result code')
    text: str = Field(default='', description='Kea explanation text')


CommandResult = Annotated[CommandSuccess | CommandFailure, Field(discriminator='status')]

_command_result_adapter: TypeAdapter[CommandSuccess | CommandFailure] = TypeAdapter(CommandResult)


def parse_command_result(command: str, payload: Any) -> CommandSuccess | CommandFailure:
    """Parse a raw control channel response into a ``CommandResult``.

    The Control Agent answers with a list holding one entry per service; a
    direct control socket answers with a bare object. Anything that does not
    carry an integer ``result`` is reported as a failure.
    """
    if isinstance(payload, list):
        payload = payload[0] if payload else {}

    if not isinstance(payload, dict) or not isinstance(payload.get('result'), int):
        return CommandFailure(command=command, result=RESULT_ERROR, text='Malformed response from Kea')

    result = payload['result']
    text = payload.get('text') or ''

    if result in (RESULT_SUCCESS, RESULT_EMPTY):
        arguments = payload.get('arguments') or {}
        if not isinstance(arguments, dict):
            arguments = {'value': arguments}
        return _command_result_adapter.validate_python(
            {'status': 'success', 'command': command, 'result': result, 'text': text, 'arguments': arguments}
        )

    return _command_result_adapter.validate_python(
        {'status': 'failure', 'command': command, 'result': result, 'text': text}
    )
