from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pokesync._transport import JsonResponse
from pokesync.client import PokeSyncClient
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import EntityNotFoundError, PokeSyncApiError, PokeSyncError, PokeSyncTransportError


@dataclass
class FakeBackend:
    entities: list[dict[str, Any]] = field(
        default_factory=lambda: [
            {"id": 25, "name": "pikachu", "image": "https://img.example/25.png", "powerLevel": 10},
        ]
    )
    calls: list[tuple[str, str, Any]] = field(default_factory=list)
    list_body: Any = None

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
        *,
        ok_statuses: Collection[int] = (200,),
    ) -> JsonResponse:
        self.calls.append((method, endpoint, payload))
        if method == "GET" and endpoint == "/entities":
            body = self.list_body if self.list_body is not None else self.entities
            return JsonResponse(status=200, body=body)

        if method == "POST" and endpoint.endswith("/power"):
            entity_id = int(endpoint.split("/")[2])
            for entity in self.entities:
                if entity["id"] == entity_id:
                    entity["powerLevel"] = max(0, entity["powerLevel"] + payload["change"])  # type: ignore[index]
                    return JsonResponse(status=200, body={"success": True, "pokemon": dict(entity)})
            status = 404
            if status not in ok_statuses:
                raise PokeSyncTransportError("HTTP 404", status_code=404, endpoint=endpoint)
            return JsonResponse(status=404, body={"success": False, "message": "Pokémon not found"})

        raise AssertionError(f"Unexpected request {method} {endpoint}")


def _client(backend: FakeBackend) -> PokeSyncClient:
    return PokeSyncClient(PokeSyncConfig(), transport=backend)


@pytest.mark.asyncio
async def test_get_entities_parses_camel_case() -> None:
    backend = FakeBackend()
    async with _client(backend) as client:
        entities = await client.get_entities()

    assert len(entities) == 1
    assert entities[0].power_level == 10
    assert entities[0].image == "https://img.example/25.png"


@pytest.mark.asyncio
async def test_get_entities_rejects_non_list_body() -> None:
    backend = FakeBackend(list_body={"error": "nope"})
    async with _client(backend) as client:
        with pytest.raises(PokeSyncApiError):
            await client.get_entities()


@pytest.mark.asyncio
async def test_get_entities_rejects_record_without_id() -> None:
    backend = FakeBackend(list_body=[{"name": "missingno", "powerLevel": 1}])
    async with _client(backend) as client:
        with pytest.raises(PokeSyncApiError):
            await client.get_entities()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "record",
    [
        {"id": 1, "name": "bulbasaur", "image": "b.png"},
        {"id": 1, "name": "bulbasaur", "powerLevel": 3},
    ],
)
async def test_get_entities_rejects_record_missing_attribute(record: dict[str, Any]) -> None:
    backend = FakeBackend(list_body=[record])
    async with _client(backend) as client:
        with pytest.raises(PokeSyncApiError):
            await client.get_entities()


@pytest.mark.asyncio
async def test_change_power_posts_change_and_returns_entity() -> None:
    backend = FakeBackend()
    async with _client(backend) as client:
        entity = await client.change_power(25, +1)

    assert entity.power_level == 11
    assert backend.calls[-1] == ("POST", "/entities/25/power", {"change": 1})


@pytest.mark.asyncio
async def test_change_power_unknown_id_raises_not_found() -> None:
    backend = FakeBackend()
    async with _client(backend) as client:
        with pytest.raises(EntityNotFoundError) as excinfo:
            await client.change_power(999, -1)

    assert excinfo.value.entity_id == 999
    assert str(excinfo.value) == "Pokémon not found"


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = PokeSyncClient(PokeSyncConfig())
    with pytest.raises(PokeSyncError):
        await client.get_entities()
