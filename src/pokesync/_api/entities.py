"""Entity endpoints.

Endpoints:
  - GET  /entities
  - POST /entities/{id}/power
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pokesync._constants import ENTITIES_PATH, NOT_FOUND_MESSAGE, POWER_PATH_TEMPLATE
from pokesync._transport import Transport
from pokesync.exceptions import EntityNotFoundError, PokeSyncApiError
from pokesync.models.entity import Entity
from pokesync.models.requests import PowerChangeRequest, PowerChangeResponse

_logger = logging.getLogger(__name__)


async def fetch_entities(transport: Transport) -> list[Entity]:
    """Fetch the full entity snapshot held by the server."""
    response = await transport.request_json("GET", ENTITIES_PATH)
    if not isinstance(response.body, list):
        raise PokeSyncApiError(
            f"Expected a JSON array from {ENTITIES_PATH}, got {type(response.body).__name__}",
            endpoint=ENTITIES_PATH,
        )
    try:
        entities = [Entity.model_validate(item) for item in response.body]
    except ValidationError as exc:
        raise PokeSyncApiError(f"Malformed entity in {ENTITIES_PATH}: {exc}", endpoint=ENTITIES_PATH) from exc
    _logger.debug("Entity list response decoded count=%d", len(entities))
    return entities


async def post_power_change(transport: Transport, entity_id: int, change: int) -> Entity:
    """Apply *change* to the power level of *entity_id* and return the updated entity."""
    endpoint = POWER_PATH_TEMPLATE.format(entity_id=entity_id)
    request = PowerChangeRequest(change=change)
    response = await transport.request_json(
        "POST",
        endpoint,
        request.to_wire(),
        ok_statuses=(200, 404),
    )
    try:
        result = PowerChangeResponse.model_validate(response.body)
    except ValidationError as exc:
        raise PokeSyncApiError(f"Malformed reply from {endpoint}: {exc}", endpoint=endpoint) from exc

    if response.status == 404 or not result.success:
        message = result.message or NOT_FOUND_MESSAGE
        if response.status == 404:
            raise EntityNotFoundError(message, entity_id=entity_id, endpoint=endpoint)
        raise PokeSyncApiError(message, endpoint=endpoint)
    if result.pokemon is None:
        raise PokeSyncApiError(f"{endpoint} reported success without an entity", endpoint=endpoint)
    return result.pokemon
