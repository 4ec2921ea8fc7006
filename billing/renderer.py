"""Template rendering for bill documents.

A template variant turns a bill document and its totals into a layout
tree. Variants only arrange and format; the totals they show always come
from ``BillDocument.totals()``. Variants are looked up by id in a
registry, and an unknown id falls back to the registry default.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .formatting import format_money, format_number, format_percent_label
from .layout import Block, Field, Image, RenderedBill, Row, Table, Text
from .models import BillDocument, Company, LineItem
from .totals import Totals

logger = logging.getLogger(__name__)

DEFAULT_VARIANT = 'modern'
EMPTY_ITEMS_TEXT = 'No items added yet'


class TemplateVariant(ABC):
    """One named layout policy.

    Subclasses build each section; ``render`` assembles them in the
    fixed order header, bill_to, items, totals, notes, footer.
    """

    variant_id = ''
    name = ''
    description = ''
    page_style: tuple = ()

    def render(self, document: BillDocument, totals: Totals) -> RenderedBill:
        sections = [
            self.header(document),
            self.bill_to(document),
            self.items(document),
            self.totals(document, totals),
        ]
        if document.notes.strip():
            sections.append(self.notes(document))
        footer = self.footer(document)
        if footer is not None:
            sections.append(footer)
        return RenderedBill(
            variant=self.variant_id,
            sections=tuple(sections),
            style=self.page_style,
        )

    @abstractmethod
    def header(self, document: BillDocument) -> Block:
        """Company identity and the document number."""

    @abstractmethod
    def bill_to(self, document: BillDocument) -> Block:
        """Client identity and billing metadata."""

    @abstractmethod
    def items(self, document: BillDocument) -> Block:
        """The line-item listing."""

    @abstractmethod
    def totals(self, document: BillDocument, totals: Totals) -> Block:
        """Subtotal, optional discount and tax rows, grand total."""

    @abstractmethod
    def notes(self, document: BillDocument) -> Block:
        """Free-text notes; only called when notes are not blank."""

    def footer(self, document: BillDocument) -> Optional[Block]:
        return None

    def describe(self) -> dict:
        return {
            'id': self.variant_id,
            'name': self.name,
            'description': self.description,
        }


def logo_nodes(company: Company) -> tuple:
    if not company.logo:
        return ()
    return (Image(src=company.logo, alt=company.name),)


def item_cells(item: LineItem, symbol: str) -> tuple:
    return (
        item.description,
        format_number(item.quantity),
        format_money(item.rate, symbol),
        format_money(item.amount, symbol),
    )


def item_table(document: BillDocument, columns: tuple, style: tuple = (),
               row_style: Callable[[int], tuple] = lambda index: ()):
    """Build the line-item table, or an empty-state text without items."""
    if not document.items:
        return Text(EMPTY_ITEMS_TEXT, role='empty')
    symbol = document.currency_symbol
    rows = tuple(
        Row(item.id, item_cells(item, symbol), row_style(index))
        for index, item in enumerate(document.items)
    )
    return Table(columns=columns, rows=rows, style=style)


def adjustment_rows(document: BillDocument, totals: Totals,
                    style: tuple = ()) -> tuple:
    """Subtotal plus the discount and tax rows.

    Discount and tax rows are left out when their percentage is zero.
    """
    symbol = document.currency_symbol
    rows = [Field('Subtotal', format_money(totals.subtotal, symbol),
                  key='subtotal', style=style)]
    if document.discount != 0:
        rows.append(Field(
            format_percent_label('Discount', document.discount),
            format_money(-totals.discount_amount, symbol),
            key='discount', style=style,
        ))
    if document.tax != 0:
        rows.append(Field(
            format_percent_label('Tax', document.tax),
            format_money(totals.tax_amount, symbol),
            key='tax', style=style,
        ))
    return tuple(rows)


def grand_total(document: BillDocument, totals: Totals, label: str,
                style: tuple = ()) -> Field:
    return Field(label, format_money(totals.total, document.currency_symbol),
                 key='total', style=style)


class TemplateRegistry:
    """Template variants keyed by id, with a default for unknown ids."""

    def __init__(self, default_id: str = DEFAULT_VARIANT):
        self.default_id = default_id
        self._variants: dict[str, TemplateVariant] = {}

    def register(self, variant_cls):
        """Register a variant class; usable as a class decorator.

        Raises:
            ValueError: If the id is empty or already registered.
        """
        variant = variant_cls()
        if not variant.variant_id:
            raise ValueError("Template variant must define variant_id")
        if variant.variant_id in self._variants:
            raise ValueError(
                f"Template variant already registered: {variant.variant_id}"
            )
        self._variants[variant.variant_id] = variant
        return variant_cls

    def __contains__(self, variant_id) -> bool:
        return isinstance(variant_id, str) and variant_id in self._variants

    def ids(self) -> list[str]:
        return list(self._variants)

    def get(self, variant_id: Optional[str]) -> TemplateVariant:
        """Look up a variant, falling back to the default."""
        variant = (self._variants.get(variant_id)
                   if isinstance(variant_id, str) else None)
        if variant is None:
            logger.warning(
                f"Unknown template '{variant_id}', using '{self.default_id}'"
            )
            variant = self._variants[self.default_id]
        return variant

    def resolve(self, variant_id: Optional[str]) -> str:
        return self.get(variant_id).variant_id

    def available(self) -> list[dict]:
        return [variant.describe() for variant in self._variants.values()]

    def render(self, document: BillDocument,
               variant_id: Optional[str]) -> RenderedBill:
        return self.get(variant_id).render(document, document.totals())


registry = TemplateRegistry()
register = registry.register


def render(document: BillDocument, variant_id: Optional[str]) -> RenderedBill:
    """Render a document with the named variant from the default registry."""
    return registry.render(document, variant_id)


def available_templates() -> list[dict]:
    return registry.available()


# Registers the built-in variants.
from . import variants  # noqa: E402,F401
