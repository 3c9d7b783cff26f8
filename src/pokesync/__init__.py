"""pokesync - Polling client and in-memory server for Pokémon power levels."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pokesync")
except PackageNotFoundError:
    __version__ = "0+local"
from pokesync.client import PokeSyncClient
from pokesync.config import PokeSyncConfig
from pokesync.exceptions import (
    DuplicateIdentityError,
    EntityNotFoundError,
    PokeSyncApiError,
    PokeSyncConfigError,
    PokeSyncError,
    PokeSyncTransportError,
)
from pokesync.models import Entity, PowerChangeRequest, PowerChangeResponse
from pokesync.sync.equality import deep_equal
from pokesync.sync.loop import SyncLoop
from pokesync.sync.reconcile import Snapshot, SyncOp, SyncOpKind, reconcile
from pokesync.sync.view import CardBoard, SyncView, apply_ops

__all__ = [
    "__version__",
    "CardBoard",
    "DuplicateIdentityError",
    "Entity",
    "EntityNotFoundError",
    "PokeSyncApiError",
    "PokeSyncClient",
    "PokeSyncConfig",
    "PokeSyncConfigError",
    "PokeSyncError",
    "PokeSyncTransportError",
    "PowerChangeRequest",
    "PowerChangeResponse",
    "Snapshot",
    "SyncLoop",
    "SyncOp",
    "SyncOpKind",
    "SyncView",
    "apply_ops",
    "deep_equal",
    "reconcile",
]
