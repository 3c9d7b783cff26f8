"""Structural equality over plain key-value records."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel


def _as_mapping(value: Any) -> Mapping[Any, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return None


def _as_sequence(value: Any) -> Sequence[Any] | None:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    return None


def _primitive_equal(a: Any, b: Any) -> bool:
    # bool is an int subclass; keep True != 1 like a strict comparison would.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return bool(a == b)


def deep_equal(a: Any, b: Any) -> bool:
    """Return whether *a* and *b* are deeply, structurally equal.

    Mappings (and pydantic models, through ``model_dump()``) are equal when
    they carry the same key set and every value pair is recursively equal.
    Sequences compare element-wise by index. Everything else, ``None``
    included, falls back to strict primitive equality. Inputs must be acyclic.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False

    mapping_a = _as_mapping(a)
    mapping_b = _as_mapping(b)
    if mapping_a is not None and mapping_b is not None:
        if len(mapping_a) != len(mapping_b):
            return False
        if mapping_a.keys() != mapping_b.keys():
            return False
        return all(deep_equal(mapping_a[key], mapping_b[key]) for key in mapping_a)

    sequence_a = _as_sequence(a)
    sequence_b = _as_sequence(b)
    if sequence_a is not None and sequence_b is not None:
        if len(sequence_a) != len(sequence_b):
            return False
        return all(deep_equal(x, y) for x, y in zip(sequence_a, sequence_b, strict=True))

    # A composite never equals a primitive, nor a mapping a sequence.
    if any(v is not None for v in (mapping_a, mapping_b, sequence_a, sequence_b)):
        return False
    return _primitive_equal(a, b)
