"""Structural equality for JSON-compatible values."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .types import UNDEFINED

_NUMBER = (int, float)


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but is its own JSON type
    return isinstance(value, _NUMBER) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def deep_equal(a: Any, b: Any) -> bool:
    """Check whether two JSON-compatible values are structurally identical.

    No coercion is applied: ``True`` differs from ``1``, ``"1"`` differs from
    ``1`` and ``None`` differs from ``UNDEFINED``. Integers and floats share
    the JSON number type, so ``1 == 1.0``. ``NaN`` equals ``NaN`` to keep the
    relation reflexive.

    Args:
        a: First value.
        b: Second value.

    Returns:
        True if both values have the same type and content, recursively.
    """
    if a is b:
        return True

    if a is UNDEFINED or b is UNDEFINED or a is None or b is None:
        return False

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if _is_number(a) or _is_number(b):
        if not (_is_number(a) and _is_number(b)):
            return False
        if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
            return True
        return a == b

    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b

    if _is_array(a) or _is_array(b):
        if not (_is_array(a) and _is_array(b)) or len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if isinstance(a, Mapping) or isinstance(b, Mapping):
        if not (isinstance(a, Mapping) and isinstance(b, Mapping)) or len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not deep_equal(value, b[key]):
                return False
        return True

    # Anything else is outside JSON; fall back to the type's own equality
    return type(a) is type(b) and a == b
