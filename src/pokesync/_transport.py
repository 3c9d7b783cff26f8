"""HTTP transport for the pokesync JSON API."""

from __future__ import annotations

import json
import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pokesync._constants import USER_AGENT
from pokesync._redact import redact_for_log
from pokesync.exceptions import PokeSyncTransportError

_logger = logging.getLogger(__name__)

_OK_STATUSES: frozenset[int] = frozenset({200})


@dataclass(frozen=True, slots=True)
class JsonResponse:
    """Decoded JSON reply together with its HTTP status."""

    status: int
    body: Any


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
        *,
        ok_statuses: Collection[int] = _OK_STATUSES,
    ) -> JsonResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport that speaks plain JSON."""

    def __init__(self, base_url: str, http_session: aiohttp.ClientSession) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
        *,
        ok_statuses: Collection[int] = _OK_STATUSES,
    ) -> JsonResponse:
        """Send a request and decode the JSON reply.

        Raises :class:`PokeSyncTransportError` on network failures, timeouts,
        statuses outside *ok_statuses* and bodies that are not JSON.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        data: str | None = None
        if payload is not None:
            headers["content-type"] = "application/json; charset=UTF-8"
            data = json.dumps(payload, separators=(",", ":"))

        url = f"{self._base_url}{endpoint}"
        _logger.debug("%s %s body=%s", method, url, redact_for_log(payload))

        try:
            async with self._http.request(method, url, data=data, headers=headers) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise PokeSyncTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise PokeSyncTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

        if status not in ok_statuses:
            raise PokeSyncTransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PokeSyncTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %d %s", method, url, status, redact_for_log(body))
        return JsonResponse(status=status, body=body)
