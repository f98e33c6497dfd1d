"""Numeric coercion for raw form entries."""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any) -> float | None:
    """Parse a raw entry (str or number) to float, None when not numeric.

    Strings are trimmed; decimals use a dot. Booleans, NaN and infinities
    are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_blank(value: Any) -> bool:
    """True for None and empty strings, the values a required input rejects."""
    return value is None or (isinstance(value, str) and value == "")
