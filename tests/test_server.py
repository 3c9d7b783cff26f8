from __future__ import annotations

import pytest
from aiohttp.test_utils import TestClient, TestServer

from pokesync.client import PokeSyncClient
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import EntityNotFoundError, PokeSyncTransportError
from pokesync.models.entity import Entity
from pokesync.server import EntityStore, create_app
from pokesync.sync.loop import SyncLoop
from pokesync.sync.view import CardBoard


def _config() -> PokeSyncConfig:
    return PokeSyncConfig(seed_enabled=False)


def _store() -> EntityStore:
    return EntityStore(
        [
            Entity(id=1, name="bulbasaur", image="b.png", power_level=3),
            Entity(id=25, name="pikachu", image="p.png", power_level=0),
        ]
    )


@pytest.mark.asyncio
async def test_list_entities_returns_wire_format() -> None:
    async with TestClient(TestServer(create_app(_config(), store=_store()))) as http:
        resp = await http.get("/entities")
        body = await resp.json()

    assert resp.status == 200
    assert body[0] == {"id": 1, "name": "bulbasaur", "image": "b.png", "powerLevel": 3}
    assert [item["id"] for item in body] == [1, 25]


@pytest.mark.asyncio
async def test_change_power_increments_and_clamps_at_zero() -> None:
    store = _store()
    async with TestClient(TestServer(create_app(_config(), store=store))) as http:
        up = await http.post("/entities/1/power", json={"change": 1})
        down = await http.post("/entities/25/power", json={"change": -1})
        up_body = await up.json()
        down_body = await down.json()

    assert up.status == 200
    assert up_body == {"success": True, "pokemon": {"id": 1, "name": "bulbasaur", "image": "b.png", "powerLevel": 4}}
    assert down_body["pokemon"]["powerLevel"] == 0
    assert store.get(1) is not None and store.get(1).power_level == 4  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_change_power_unknown_id_is_404() -> None:
    async with TestClient(TestServer(create_app(_config(), store=_store()))) as http:
        resp = await http.post("/entities/999/power", json={"change": 1})
        body = await resp.json()

    assert resp.status == 404
    assert body == {"success": False, "message": "Pokémon not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"change": "up"}, {"change": None}, [1]])
async def test_change_power_requires_integer_change(payload: object) -> None:
    async with TestClient(TestServer(create_app(_config(), store=_store()))) as http:
        resp = await http.post("/entities/1/power", json=payload)
        body = await resp.json()

    assert resp.status == 400
    assert body["success"] is False


@pytest.mark.asyncio
async def test_change_power_rejects_non_integer_id() -> None:
    async with TestClient(TestServer(create_app(_config(), store=_store()))) as http:
        resp = await http.post("/entities/pikachu/power", json={"change": 1})

    assert resp.status == 400


@pytest.mark.asyncio
async def test_client_and_loop_against_live_server() -> None:
    store = _store()
    server = TestServer(create_app(_config(), store=store))
    async with server:
        config = PokeSyncConfig(base_url=str(server.make_url("/")), seed_enabled=False)
        board = CardBoard()
        async with PokeSyncClient(config) as client:
            loop = SyncLoop(client, board)
            await loop.poll_once()
            assert [card.name for card in board.cards] == ["bulbasaur", "pikachu"]

            updated = await loop.change_power(1, +1)
            assert updated is not None and updated.power_level == 4
            assert await loop.poll_once() == []

            with pytest.raises(EntityNotFoundError):
                await client.change_power(404, 1)

            store.replace_all([Entity(id=7, name="squirtle", image="s.png", power_level=9)])
            ops = await loop.poll_once()

    assert ops is not None
    assert [card.id for card in board.cards] == [7]


@pytest.mark.asyncio
async def test_client_wraps_unexpected_status() -> None:
    server = TestServer(create_app(_config(), store=_store()))
    async with server:
        config = PokeSyncConfig(base_url=str(server.make_url("/missing")), seed_enabled=False)
        async with PokeSyncClient(config) as client:
            with pytest.raises(PokeSyncTransportError) as excinfo:
                await client.get_entities()

    assert excinfo.value.status_code == 404
    assert excinfo.value.endpoint == "/entities"
