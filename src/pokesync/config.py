"""Client and server configuration for pokesync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pokesync._constants import (
    BASE_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEED_IDS,
    POKEAPI_URL,
)
from pokesync.exceptions import PokeSyncConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_seed_ids(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError as exc:
        raise PokeSyncConfigError(f"POKESYNC_SEED_IDS must be comma-separated integers, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class PokeSyncConfig:
    """Configuration shared by the client, the sync loop and the server.

    Parameters
    ----------
    base_url : str
        Server base URL the client talks to.
    poll_interval : float
        Seconds between two scheduled poll cycles.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    host : str
        Interface the server binds to.
    port : int
        Port the server listens on.
    seed_ids : tuple[int, ...]
        PokéAPI ids used to seed the server store at startup.
    pokeapi_url : str
        URL template for seeding; ``{entity_id}`` is substituted.
    seed_enabled : bool
        Seed the store from PokéAPI on startup.
    """

    base_url: str = BASE_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    seed_ids: tuple[int, ...] = DEFAULT_SEED_IDS
    pokeapi_url: str = POKEAPI_URL
    seed_enabled: bool = True

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise PokeSyncConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise PokeSyncConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if "{entity_id}" not in self.pokeapi_url:
            raise PokeSyncConfigError("pokeapi_url must contain an '{entity_id}' placeholder")
        # Normalise once so endpoint joins never produce '//'.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> PokeSyncConfig:
        """Create configuration from environment variables.

        Reads ``POKESYNC_*`` variables plus ``PORT`` for the server port.
        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "POKESYNC_BASE_URL": "base_url",
            "POKESYNC_HOST": "host",
            "POKESYNC_POKEAPI_URL": "pokeapi_url",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        try:
            interval_env = env.get("POKESYNC_POLL_INTERVAL")
            if interval_env is not None and "poll_interval" not in overrides:
                config_kwargs["poll_interval"] = float(interval_env)

            timeout_env = env.get("POKESYNC_REQUEST_TIMEOUT")
            if timeout_env is not None and "request_timeout" not in overrides:
                config_kwargs["request_timeout"] = float(timeout_env)

            port_env = env.get("POKESYNC_PORT", env.get("PORT"))
            if port_env is not None and "port" not in overrides:
                config_kwargs["port"] = int(port_env)
        except ValueError as exc:
            raise PokeSyncConfigError(f"Invalid numeric environment value: {exc}") from exc

        seed_env = env.get("POKESYNC_SEED_IDS")
        if seed_env is not None and "seed_ids" not in overrides:
            config_kwargs["seed_ids"] = _parse_seed_ids(seed_env)

        if "seed_enabled" not in overrides:
            config_kwargs["seed_enabled"] = _env_bool(env.get("POKESYNC_SEED_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
