"""Request and response bodies of the power-change endpoint."""

from __future__ import annotations

from pydantic import StrictInt

from pokesync.models._base import PokeSyncBaseModel
from pokesync.models.entity import Entity


class PowerChangeRequest(PokeSyncBaseModel):
    """Body of ``POST /entities/{id}/power``."""

    change: StrictInt
    """Signed delta applied to the power level (usually ``+1`` or ``-1``)."""


class PowerChangeResponse(PokeSyncBaseModel):
    """Reply of ``POST /entities/{id}/power``.

    On success ``pokemon`` carries the updated entity; on failure
    ``message`` explains why.
    """

    success: bool
    pokemon: Entity | None = None
    message: str | None = None
