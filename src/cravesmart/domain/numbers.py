"""Coercion of loosely typed model output into numbers."""

import math
import re
from collections.abc import Iterable, Mapping

_NON_NUMERIC = re.compile(r"[^0-9.]")
_NUMERIC_PREFIX = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


def is_missing(value: object) -> bool:
    """Return True for values that carry no data at all."""
    return value is None or value == ""


def to_number(value: object) -> float | int:
    """Best-effort conversion of an untrusted value into a number.

    Literal finite numbers pass through unchanged. Mappings and sequences
    are scanned in order for the first number or numeric-looking string.
    Strings lose every character except digits and dots before parsing
    the leading number. Anything unrecoverable, NaN and infinities
    included, becomes 0.
    """
    if is_missing(value) or isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return value if _is_finite(value) else 0
    if isinstance(value, Mapping):
        return _first_number(value.values())
    if isinstance(value, list | tuple):
        return _first_number(value)
    if isinstance(value, str):
        parsed = _parse_string(value)
        return 0 if parsed is None else parsed
    return 0


def _is_finite(value: float | int) -> bool:
    return not isinstance(value, float) or math.isfinite(value)


def _first_number(members: Iterable[object]) -> float | int:
    for member in members:
        if isinstance(member, bool):
            continue
        if isinstance(member, int | float):
            if _is_finite(member):
                return member
            continue
        if isinstance(member, str):
            parsed = _parse_string(member)
            if parsed is not None:
                return parsed
    return 0


def _parse_string(raw: str) -> float | None:
    cleaned = _NON_NUMERIC.sub("", raw)
    match = _NUMERIC_PREFIX.match(cleaned)
    if match is None:
        return None
    return float(match.group())
