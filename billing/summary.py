"""Bill summary module.

This module provides the live summary card: subtotal, discount and tax
rows, grand total and item count, taken from the shared totals engine.
"""

from dataclasses import dataclass, field
from typing import Optional

from .formatting import format_money, format_percent_label
from .models import BillDocument
from .totals import Totals


@dataclass
class BillSummary:
    """Summary of a bill document.

    Attributes:
        bill_number: The bill number
        currency: Currency code
        currency_symbol: Display glyph for the currency
        totals: Totals computed from the document
        tax: Tax percentage
        discount: Discount percentage
        item_count: Number of line items
        rows: Formatted (label, value) rows, optional rows omitted
    """
    bill_number: str
    currency: str
    currency_symbol: str
    totals: Totals
    tax: float = 0.0
    discount: float = 0.0
    item_count: int = 0
    rows: list[dict] = field(default_factory=list)

    @property
    def item_label(self) -> str:
        return f"{self.item_count} item{'' if self.item_count == 1 else 's'}"

    def to_dict(self) -> dict:
        """Convert summary to dictionary format.

        Returns:
            Dictionary representation of the summary.
        """
        symbol = self.currency_symbol
        return {
            'bill_number': self.bill_number,
            'currency': self.currency,
            'currency_symbol': symbol,
            'subtotal': format_money(self.totals.subtotal, symbol),
            'discount_amount': format_money(self.totals.discount_amount, symbol),
            'tax_amount': format_money(self.totals.tax_amount, symbol),
            'total': format_money(self.totals.total, symbol),
            'item_count': self.item_count,
            'item_label': self.item_label,
            'rows': self.rows,
        }


class BillSummarizer:
    """Summarizes bill documents for the live totals card."""

    def summarize(self, document: BillDocument,
                  totals: Optional[Totals] = None) -> BillSummary:
        """Generate a summary of a bill document.

        Args:
            document: The document to summarize.
            totals: Precomputed totals for this document, if at hand.

        Returns:
            A BillSummary built from the document's totals.
        """
        if totals is None:
            totals = document.totals()
        return BillSummary(
            bill_number=document.bill_number,
            currency=document.currency,
            currency_symbol=document.currency_symbol,
            totals=totals,
            tax=document.tax,
            discount=document.discount,
            item_count=len(document.items),
            rows=self._summary_rows(document, totals),
        )

    def _summary_rows(self, document: BillDocument,
                      totals: Totals) -> list[dict]:
        """Build the display rows of the card.

        Discount and tax rows only appear for non-zero percentages.
        """
        symbol = document.currency_symbol
        rows = [{
            'key': 'subtotal',
            'label': 'Subtotal',
            'value': format_money(totals.subtotal, symbol),
        }]
        if document.discount != 0:
            rows.append({
                'key': 'discount',
                'label': format_percent_label('Discount', document.discount),
                'value': format_money(-totals.discount_amount, symbol),
            })
        if document.tax != 0:
            rows.append({
                'key': 'tax',
                'label': format_percent_label('Tax', document.tax),
                'value': f"+{format_money(totals.tax_amount, symbol)}",
            })
        rows.append({
            'key': 'total',
            'label': 'Total',
            'value': format_money(totals.total, symbol),
        })
        return rows

    def get_formatted_summary(self, document: BillDocument) -> str:
        """Generate a formatted text summary of the bill.

        Args:
            document: The document to summarize.

        Returns:
            Formatted string representation of the summary card.
        """
        summary = self.summarize(document)

        lines = [
            f"Bill Summary: {summary.bill_number}",
            f"{'=' * 40}",
        ]
        for row in summary.rows:
            if row['key'] == 'total':
                lines.append("-" * 40)
            lines.append(f"{row['label']:<28}{row['value']:>12}")

        lines.append("")
        lines.append(summary.item_label)

        return "\n".join(lines)
