"""
Helpers for reading raw answer values.

Answer sets come straight from the rendering layer, so values arrive as
whatever the widget produced: strings, numbers, booleans, lists or dates.
"""

import math
import re
from datetime import date
from typing import Any

NUMBER_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def is_empty(value: Any) -> bool:
    """An absent value: None, empty string or empty list."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)) and len(value) == 0:
        return True
    return False


def parse_number(value: Any) -> float | None:
    """
    Parse a number or numeric string into a finite float.

    Returns None for booleans, non-numeric strings, NaN and infinities.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_LITERAL.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def format_number(number: float) -> str:
    """Render a number the way a browser would show it ("7" not "7.0")."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def to_text(value: Any) -> str:
    """String form of an answer value, used by concat and formula substitution."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
