"""Custom exception hierarchy for pokesync."""

from __future__ import annotations


class PokeSyncError(Exception):
    """Base exception for all pokesync errors."""


class PokeSyncConfigError(PokeSyncError):
    """Invalid or missing configuration."""


class PokeSyncTransportError(PokeSyncError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class PokeSyncApiError(PokeSyncError):
    """Server answered with ``success: false`` or an unexpected body shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class EntityNotFoundError(PokeSyncApiError):
    """The server does not know the requested entity id (HTTP 404)."""

    def __init__(self, message: str, *, entity_id: int, endpoint: str = "") -> None:
        self.entity_id = entity_id
        super().__init__(message, endpoint=endpoint)


class DuplicateIdentityError(PokeSyncError):
    """A snapshot carries the same identity key more than once.

    Raised before any state is mutated so the held snapshot stays intact.
    """

    def __init__(self, entity_id: int) -> None:
        self.entity_id = entity_id
        super().__init__(f"Duplicate entity id {entity_id} in snapshot")
