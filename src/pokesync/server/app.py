"""aiohttp.web application exposing the entity routes.

Routes:
  - GET  /entities
  - POST /entities/{id}/power   body ``{"change": int}``
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import random
from collections.abc import AsyncIterator

import aiohttp
from aiohttp import web
from pydantic import ValidationError

from pokesync._constants import ENTITIES_PATH, NOT_FOUND_MESSAGE
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import PokeSyncError
from pokesync.models.requests import PowerChangeRequest, PowerChangeResponse
from pokesync.server.seed import fetch_seed_entities
from pokesync.server.store import EntityStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", EntityStore)
CONFIG_KEY = web.AppKey("config", PokeSyncConfig)


def _failure(message: str, status: int) -> web.Response:
    body = PowerChangeResponse(success=False, message=message)
    return web.json_response(body.to_wire(exclude_none=True), status=status)


async def list_entities(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    return web.json_response([entity.to_wire() for entity in store.entities()])


async def change_power(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    try:
        entity_id = int(request.match_info["entity_id"])
    except ValueError:
        return _failure("Entity id must be an integer", 400)

    try:
        payload = await request.json()
    except json.JSONDecodeError:
        return _failure("Request body must be JSON", 400)
    try:
        body = PowerChangeRequest.model_validate(payload)
    except ValidationError:
        return _failure("Body must contain an integer 'change'", 400)

    entity = store.change_power(entity_id, body.change)
    if entity is None:
        _logger.info("Power change for unknown id %d", entity_id)
        return _failure(NOT_FOUND_MESSAGE, 404)

    _logger.debug("Power level of %s (%d) changed by %d to %d", entity.name, entity.id, body.change, entity.power_level)
    return web.json_response(PowerChangeResponse(success=True, pokemon=entity).to_wire(exclude_none=True))


async def _seed_store(config: PokeSyncConfig, store: EntityStore) -> None:
    timeout = aiohttp.ClientTimeout(total=config.request_timeout)
    async with aiohttp.ClientSession(timeout=timeout) as http:
        try:
            entities = await fetch_seed_entities(http, config.pokeapi_url, config.seed_ids, rng=random.Random())
        except PokeSyncError as exc:
            _logger.error("Error fetching Pokémon data: %s", exc)
            return
    store.replace_all(entities)
    _logger.info("Pokémon data fetched and stored on server.")


async def _seed_ctx(app: web.Application) -> AsyncIterator[None]:
    """Seed in the background so the server answers (with ``[]``) right away."""
    task = asyncio.create_task(_seed_store(app[CONFIG_KEY], app[STORE_KEY]))
    yield
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


def create_app(config: PokeSyncConfig, *, store: EntityStore | None = None) -> web.Application:
    """Build the application. Seeding runs only when ``config.seed_enabled``."""
    app = web.Application()
    app[CONFIG_KEY] = config
    app[STORE_KEY] = store if store is not None else EntityStore()
    app.router.add_get(ENTITIES_PATH, list_entities)
    app.router.add_post(ENTITIES_PATH + "/{entity_id}/power", change_power)
    if config.seed_enabled:
        app.cleanup_ctx.append(_seed_ctx)
    return app


def run_server(config: PokeSyncConfig) -> None:
    """Serve until interrupted."""
    app = create_app(config)
    _logger.info("Server is running on port %d", config.port)
    web.run_app(app, host=config.host, port=config.port, print=None)
