"""Entity model."""

from __future__ import annotations

from pydantic import Field

from pokesync.models._base import PokeSyncBaseModel


class Entity(PokeSyncBaseModel):
    """A creature as served by ``GET /entities``.

    ``id`` is the identity key and never changes; every other field is a
    mutable attribute compared by value during reconciliation.
    """

    id: int
    """Stable identity key (the PokéAPI id)."""
    name: str
    """Display name (e.g. ``"pikachu"``)."""
    image: str
    """Sprite URI."""
    power_level: int = Field(ge=0)
    """Current power level, never negative."""
