"""Presentation formatting for rendered bills.

Rounding to two fraction digits happens here and nowhere else.
"""

from datetime import date


def format_money(value: float, symbol: str) -> str:
    """Format an amount with its currency glyph, e.g. ``$1250.00``.

    Negative amounts keep the sign in front of the glyph; amounts that
    round to zero never carry a sign.
    """
    text = f"{abs(value):.2f}"
    if value < 0 and text != "0.00":
        return f"-{symbol}{text}"
    return f"{symbol}{text}"


def format_number(value: float) -> str:
    """Format a quantity or percentage without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_percent_label(label: str, value: float) -> str:
    return f"{label} ({format_number(value)}%)"


def format_date(value: str) -> str:
    """Format an ISO date as month/day/year.

    Values that are not ISO dates are shown as given.
    """
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError):
        return value or ''
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
