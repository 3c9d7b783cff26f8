"""Helpers for compact debug logging.

Snapshots and PokéAPI payloads can be large (sprite URIs, nested
``sprites`` blocks). This module trims them before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_MAX_ITEMS = 20


def redact_for_log(value: Any, *, max_string: int = 128, _depth: int = 0) -> Any:
    """Return a truncated copy of *value* suitable for debug logs."""
    if _depth > 8:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        return {str(k): redact_for_log(v, max_string=max_string, _depth=_depth + 1) for k, v in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            items.append(f"<+{len(value) - _MAX_ITEMS} more>")
        return items

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
