"""Seed the entity store from PokéAPI."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Sequence
from typing import Any

import aiohttp

from pokesync._constants import POWER_LEVEL_SEED_MAX, USER_AGENT
from pokesync._redact import redact_for_log
from pokesync.exceptions import PokeSyncApiError, PokeSyncTransportError
from pokesync.models.entity import Entity

_logger = logging.getLogger(__name__)


def entity_from_pokeapi(payload: dict[str, Any], rng: random.Random) -> Entity:
    """Build an entity from a ``/api/v2/pokemon/{id}`` payload.

    The power level is not part of PokéAPI; it starts at a random value.
    """
    try:
        sprites = payload.get("sprites") or {}
        return Entity(
            id=payload["id"],
            name=payload["name"],
            image=sprites.get("front_default") or "",
            power_level=rng.randrange(POWER_LEVEL_SEED_MAX),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise PokeSyncApiError(f"Unexpected PokéAPI payload: {redact_for_log(payload)}") from exc


async def _fetch_one(http: aiohttp.ClientSession, url: str) -> dict[str, Any]:
    try:
        async with http.get(url, headers={"user-agent": USER_AGENT}) as resp:
            if resp.status != 200:
                raise PokeSyncTransportError(f"HTTP {resp.status} from {url}", status_code=resp.status, endpoint=url)
            payload: dict[str, Any] = await resp.json()
    except aiohttp.ClientError as exc:
        raise PokeSyncTransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc
    except TimeoutError as exc:
        raise PokeSyncTransportError(f"Request to {url} timed out", endpoint=url) from exc
    except ValueError as exc:
        raise PokeSyncTransportError(f"Invalid JSON from {url}: {exc}", status_code=200, endpoint=url) from exc
    return payload


async def fetch_seed_entities(
    http: aiohttp.ClientSession,
    url_template: str,
    entity_ids: Sequence[int],
    *,
    rng: random.Random | None = None,
) -> list[Entity]:
    """Fetch every id concurrently; any failure fails the whole seed."""
    rng = rng or random.Random()
    payloads = await asyncio.gather(*(_fetch_one(http, url_template.format(entity_id=i)) for i in entity_ids))
    return [entity_from_pokeapi(payload, rng) for payload in payloads]
