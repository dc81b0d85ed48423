"""Italian locale formatting for engine figures.

Presentation helpers only; the engine itself never rounds.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def _to_decimal(value: Decimal | float | int | None) -> Decimal | None:
    """Decimal for value, or None if it is missing, NaN or infinite."""
    if value is None:
        return None
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        return None
    if not d.is_finite():
        return None
    return d


def _italian(d: Decimal, places: int) -> str:
    # US: 1,234.50 -> Italian: 1.234,50
    quantum = Decimal(1).scaleb(-places)
    formatted = f"{d.quantize(quantum, rounding=ROUND_HALF_UP):,.{places}f}"
    return formatted.replace(",", "X").replace(".", ",").replace("X", ".")


def format_currency(value: Decimal | float | int | None) -> str:
    """Format as Italian currency: 1234.5 -> "€1.234,50"; invalid -> "€0,00"."""
    d = _to_decimal(value)
    if d is None:
        d = Decimal("0")
    return f"€{_italian(d, 2)}"


def format_percentage(value: Decimal | float | int | None, places: int = 1) -> str:
    """Format a percentage already scaled to 0-100: 24.31 -> "24,3%"."""
    d = _to_decimal(value)
    if d is None:
        return "-"
    return f"{_italian(d, places)}%"
