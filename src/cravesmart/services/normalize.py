"""Display formatting for normalised model output."""

from cravesmart.domain.numbers import is_missing, to_number

__all__ = ["PLACEHOLDER", "format_number", "format_value", "is_missing", "to_number"]

PLACEHOLDER = "—"


def format_number(value: float | int) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value: object, suffix: str = "") -> str:
    """Format a value for display, using a dash for zero calories or gaps."""
    number = to_number(value)
    if number == 0 and ("kcal" in suffix or is_missing(value)):
        return PLACEHOLDER
    return f"{format_number(number)}{suffix}"
