"""High-level async client for the pokesync server."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pokesync._api import entities as _entities_api
from pokesync._transport import HttpTransport, Transport
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import PokeSyncError
from pokesync.models.entity import Entity

_logger = logging.getLogger(__name__)


class PokeSyncClient:
    """Async client for the entity API.

    Usage::

        async with PokeSyncClient(config) as client:
            entities = await client.get_entities()
            await client.change_power(25, +1)
    """

    def __init__(
        self,
        config: PokeSyncConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PokeSyncClient:
        if self._transport is None:
            if self._http_session is None:
                timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
                self._http_session = aiohttp.ClientSession(timeout=timeout)
            self._transport = HttpTransport(self._config.base_url, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise PokeSyncError("Client not initialized. Use 'async with PokeSyncClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_entities(self) -> list[Entity]:
        """Fetch the current server snapshot."""
        return await _entities_api.fetch_entities(self._require_transport())

    async def change_power(self, entity_id: int, change: int) -> Entity:
        """Increment or decrement an entity's power level.

        Raises
        ------
        EntityNotFoundError
            The server does not know *entity_id*.
        PokeSyncTransportError
            Network failure or unexpected HTTP status.
        """
        entity = await _entities_api.post_power_change(self._require_transport(), entity_id, change)
        _logger.debug("Power level of %s (%d) is now %d", entity.name, entity.id, entity.power_level)
        return entity
