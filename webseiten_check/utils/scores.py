"""
Value coercion helpers shared by the response models.
"""

import math
from typing import Any


def round_half_up(value: float) -> int:
    """Round like the report does (0.5 rounds up), not banker's rounding."""
    return int(math.floor(value + 0.5))


def coerce_score(value: Any, low: int, high: int, default: int) -> int:
    """
    Turn an upstream score into an int clamped to [low, high].

    Non-numeric values (including booleans, NaN and infinities) give ``default``.
    Numeric strings are accepted.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "."))
        except ValueError:
            return default
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return min(high, max(low, round_half_up(number)))


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""
