"""Base model for pokesync wire payloads.

Every model inherits from :class:`PokeSyncBaseModel` which maps the
camelCase keys of the JSON API (``powerLevel``) to snake_case fields
(``power_level``) and freezes instances so records held in a snapshot
can only be replaced, never edited in place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PokeSyncBaseModel(BaseModel):
    """Base for pokesync models.

    Handles:
    * camelCase ↔ snake_case via ``alias_generator=to_camel``
    * unknown keys are ignored
    * instances are immutable
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self, *, exclude_none: bool = False) -> dict[str, Any]:
        """Dump the model using the camelCase keys the API speaks."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=exclude_none)
