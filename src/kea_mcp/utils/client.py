"""Async Kea Control Agent client.

Provides access to the Kea DHCPv4 command channel:
- Lease listing and removal (lease4-get-all, lease4-del)
- Host reservation management (reservation-get-all/add/update/del)
- Running configuration (config-get)
- HA heartbeats per peer (ha-heartbeat)

Every response is parsed once into a ``CommandResult``; callers only ever
see typed payloads or a ``ToolError`` subclass.
"""

import httpx
from kea_mcp.config import Settings
from kea_mcp.models import (
    CommandFailure,
    CommandSuccess,
    HeartbeatPayload,
    Lease,
    Reservation,
    parse_command_result,
)
from kea_mcp.utils.errors import ErrorCodes, ToolError, UnreachableError, UpstreamError
from loguru import logger
from typing import Any


class KeaClient:
    """Async Kea Control Agent client."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize Kea client.

        Args:
            settings: Connection settings
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> 'KeaClient':
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def connect(self) -> None:
        """Create the HTTP client for the Control Agent."""
        if self._client:
            return

        auth = None
        if self._settings.has_auth:
            auth = httpx.BasicAuth(self._settings.username, self._settings.password)

        self._client = httpx.AsyncClient(
            base_url=self._settings.kea_url,
            auth=auth,
            verify=self._settings.verify_ssl,
            timeout=httpx.Timeout(self._settings.timeout),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            headers={'Content-Type': 'application/json'},
            transport=self._transport,
        )
        logger.debug(f'Kea client ready for {self._settings.kea_url}')

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def command(
        self,
        command: str,
        arguments: dict[str, Any] | None = None,
    ) -> CommandSuccess | CommandFailure:
        """Send one command and return its parsed result.

        Raises:
            UnreachableError: transport failure or timeout
            ToolError: API_ERROR for non-JSON or HTTP error responses
        """
        if not self._client:
            await self.connect()

        body: dict[str, Any] = {'command': command, 'service': [self._settings.service]}
        if arguments is not None:
            body['arguments'] = arguments

        try:
            response = await self._client.post('/', json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise UnreachableError(f'Kea command {command} timed out: {e}', timed_out=True)
        except httpx.HTTPStatusError as e:
            raise ToolError(
                message=f'HTTP {e.response.status_code} from Kea for {command}: {e.response.text[:200]}',
                error_code=ErrorCodes.API_ERROR,
            )
        except httpx.RequestError as e:
            raise UnreachableError(f'Request to Kea failed for {command}: {e}')
        except ValueError as e:
            raise ToolError(
                message=f'Kea returned a non-JSON response for {command}: {e}',
                error_code=ErrorCodes.API_ERROR,
            )

        result = parse_command_result(command, payload)
        logger.debug(f'Kea {command} -> result {result.result}')
        return result

    async def _expect_success(
        self,
        command: str,
        arguments: dict[str, Any] | None = None,
        allow_empty: bool = False,
    ) -> CommandSuccess:
        """Run a command and raise ``UpstreamError`` on any failure result."""
        result = await self.command(command, arguments)
        if isinstance(result, CommandFailure):
            raise UpstreamError(command, result.result, result.text)
        if result.is_empty and not allow_empty:
            raise UpstreamError(command, result.result, result.text or 'Empty result')
        return result

    # =========================================================================
    # Lease Methods
    # =========================================================================

    async def get_leases(self, subnet_id: int | None = None) -> list[Lease]:
        """Get all leases, optionally restricted to one subnet."""
        arguments = {'subnets': [subnet_id]} if subnet_id is not None else None
        result = await self._expect_success('lease4-get-all', arguments, allow_empty=True)
        return [Lease.model_validate(item) for item in result.arguments.get('leases', [])]

    async def delete_lease(self, ip_address: str) -> None:
        await self._expect_success('lease4-del', {'ip-address': ip_address})

    # =========================================================================
    # Reservation Methods
    # =========================================================================

    async def get_reservations(self, subnet_id: int) -> list[Reservation]:
        """Get all host reservations in a subnet."""
        result = await self._expect_success(
            'reservation-get-all', {'subnet-id': subnet_id}, allow_empty=True
        )
        reservations = []
        for item in result.arguments.get('hosts', []):
            item = {**item}
            item.setdefault('subnet-id', subnet_id)
            if 'ip-address' not in item:
                # Reservations without an IPv4 address only pin options
                continue
            reservations.append(Reservation.model_validate(item))
        return reservations

    async def add_reservation(self, reservation: Reservation) -> None:
        await self._expect_success('reservation-add', {'reservation': reservation.to_kea()})

    async def update_reservation(self, reservation: Reservation) -> None:
        await self._expect_success('reservation-update', {'reservation': reservation.to_kea()})

    async def delete_reservation(self, subnet_id: int, ip_address: str) -> None:
        await self._expect_success(
            'reservation-del', {'subnet-id': subnet_id, 'ip-address': ip_address}
        )

    # =========================================================================
    # Configuration & HA Methods
    # =========================================================================

    async def get_config(self) -> dict[str, Any]:
        result = await self._expect_success('config-get')
        return result.arguments

    async def ha_heartbeat(self, server_name: str) -> HeartbeatPayload:
        """Ask one HA peer for its operating state."""
        result = await self._expect_success('ha-heartbeat', {'server-name': server_name})
        return HeartbeatPayload.model_validate(result.arguments)
