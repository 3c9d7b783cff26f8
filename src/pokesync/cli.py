"""Command line entry point.

Usage::

    pokesync serve [--port 3005]
    pokesync watch [--base-url http://localhost:3005] [--interval 5]
    pokesync power 25 +1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pokesync.client import PokeSyncClient
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import PokeSyncError
from pokesync.server import run_server
from pokesync.sync.loop import SyncLoop
from pokesync.sync.reconcile import SyncOp
from pokesync.sync.view import CardBoard

_logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokesync", description="Pokémon power levels, kept in sync.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the in-memory entity server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--no-seed", action="store_true", help="Start with an empty store")

    watch = sub.add_parser("watch", help="Poll the server and print the board on every change")
    watch.add_argument("--base-url", default=None)
    watch.add_argument("--interval", type=float, default=None, help="Seconds between polls")

    power = sub.add_parser("power", help="Increase or decrease one power level")
    power.add_argument("entity_id", type=int)
    power.add_argument("change", type=int, help="Signed delta, e.g. +1 or -1")
    power.add_argument("--base-url", default=None)
    return parser


def _config_from_args(args: argparse.Namespace) -> PokeSyncConfig:
    overrides: dict[str, object] = {}
    for arg_name, field_name in (
        ("host", "host"),
        ("port", "port"),
        ("base_url", "base_url"),
        ("interval", "poll_interval"),
    ):
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value
    if getattr(args, "no_seed", False):
        overrides["seed_enabled"] = False
    return PokeSyncConfig.from_env(**overrides)


def _alert(message: str) -> None:
    print(f"!! {message}", file=sys.stderr)


async def _watch(config: PokeSyncConfig) -> None:
    board = CardBoard()

    def _print_board(ops: list[SyncOp]) -> None:
        if ops:
            print(board.render(), end="\n\n", flush=True)

    async with PokeSyncClient(config) as client:
        loop = SyncLoop(client, board, interval=config.poll_interval, notify=_alert, on_cycle=_print_board)
        await loop.run()


async def _power(config: PokeSyncConfig, entity_id: int, change: int) -> int:
    async with PokeSyncClient(config) as client:
        board = CardBoard()
        loop = SyncLoop(client, board, notify=_alert)
        entity = await loop.change_power(entity_id, change)
    if entity is None:
        return 1
    print(f"{entity.name} power level updated to {entity.power_level}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _config_from_args(args)
        if args.command == "serve":
            run_server(config)
            return 0
        if args.command == "watch":
            asyncio.run(_watch(config))
            return 0
        return asyncio.run(_power(config, args.entity_id, args.change))
    except PokeSyncError as exc:
        _logger.error("%s", exc)
        return 2
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
