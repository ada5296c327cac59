# core/utils.py

"""
Repository for program-wide utilities.
"""

import math
import re
from typing import Any

# decimal literal, optionally signed, with optional exponent
_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def parse_number(raw: Any) -> float:
    """
    Leniently parses user input into a float, returning NaN when no number can be read.

    Strings are stripped and parsed from their longest leading numeric prefix, so "42abc" reads as 42.0
    and "" reads as NaN. "Infinity" and "-Infinity" are accepted. Booleans and None are never numbers.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan

    if isinstance(raw, (int, float)):
        return float(raw)

    text = str(raw).strip()

    for literal, value in _INFINITIES.items():
        if text.startswith(literal):
            return value

    match = _NUMBER.match(text)
    if not match:
        return math.nan

    return float(match.group(0))


def parse_strict_number(raw: Any) -> float:
    """
    Parses user input as a whole-string number, returning NaN when any part of it is not numeric.

    Unlike `parse_number()`, "42abc" reads as NaN. Surrounding whitespace is ignored.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan

    if isinstance(raw, (int, float)):
        return float(raw)

    text = str(raw).strip()

    if text in _INFINITIES:
        return _INFINITIES[text]

    if not _NUMBER.fullmatch(text):
        return math.nan

    return float(text)


def is_number(value: Any) -> bool:
    """True for finite int/float values; NaN and infinities count as ungraded."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
