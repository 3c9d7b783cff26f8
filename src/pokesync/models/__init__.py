"""Pydantic models for the pokesync wire format."""

from pokesync.models.entity import Entity
from pokesync.models.requests import PowerChangeRequest, PowerChangeResponse

__all__ = [
    "Entity",
    "PowerChangeRequest",
    "PowerChangeResponse",
]
