"""Totals computation for bill documents.

This is the only place subtotal, discount, tax and grand total are
calculated. Layout variants and the summary card consume the result and
never recompute it.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Totals:
    """Derived totals of a bill.

    Attributes:
        subtotal: Sum of all line item amounts
        discount_amount: subtotal * discount / 100
        tax_amount: subtotal * tax / 100 (tax applies before discount)
        total: subtotal - discount_amount + tax_amount
    """
    subtotal: float = 0.0
    discount_amount: float = 0.0
    tax_amount: float = 0.0
    total: float = 0.0

    def to_dict(self) -> dict:
        return {
            'subtotal': self.subtotal,
            'discount_amount': self.discount_amount,
            'tax_amount': self.tax_amount,
            'total': self.total,
        }


def compute_totals(line_items: Iterable, tax_pct: float,
                   discount_pct: float) -> Totals:
    """Reduce line items and percentages into bill totals.

    Values are left unrounded; rounding belongs to formatting.

    Args:
        line_items: Items exposing an ``amount`` attribute.
        tax_pct: Tax percentage, passed through unclamped.
        discount_pct: Discount percentage, passed through unclamped.

    Returns:
        The computed Totals.
    """
    subtotal = sum((item.amount for item in line_items), 0.0)
    discount_amount = subtotal * discount_pct / 100
    tax_amount = subtotal * tax_pct / 100
    return Totals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=subtotal - discount_amount + tax_amount,
    )
