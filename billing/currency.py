"""Currency symbol lookup.

Currency is a display label only: codes map to a glyph and nothing is
ever converted.
"""

from typing import Optional

FALLBACK_SYMBOL = '$'

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
    'CAD': '$',
    'AUD': '$',
}


def symbol_for(code: Optional[str]) -> str:
    """Return the display glyph for a currency code.

    Unknown or empty codes resolve to ``FALLBACK_SYMBOL``.
    """
    if not code:
        return FALLBACK_SYMBOL
    return CURRENCY_SYMBOLS.get(code, FALLBACK_SYMBOL)


def currency_choices() -> list[dict]:
    """List the selectable currencies in display order."""
    return [
        {'value': code, 'label': f"{symbol} {code}", 'symbol': symbol}
        for code, symbol in CURRENCY_SYMBOLS.items()
    ]
