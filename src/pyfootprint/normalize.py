"""Normalization helpers.

Centralizes the permissive parsing of user-entered quantities: anything
that is not a usable number becomes ``0.0`` instead of an error.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def coerce_quantity(value: Any) -> float:
    """Coerce a form value to a quantity.

    Missing, non-numeric and non-finite input degrades to ``0.0``.
    Negative numbers are kept as entered.
    """
    parsed = safe_float(value)
    return 0.0 if parsed is None else parsed
