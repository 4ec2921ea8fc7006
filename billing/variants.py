"""Built-in template variants.

All four show the same content and the same values; they differ in
arrangement, grouping and emphasis only.
"""

from .formatting import format_date
from .layout import Block, Column, Field, Rule, Text
from .renderer import (
    adjustment_rows,
    grand_total,
    item_table,
    logo_nodes,
    register,
    TemplateVariant,
)


def _columns(description, quantity, rate, amount, spans=(1, 1, 1, 1)):
    return (
        Column('description', description, 'left', spans[0]),
        Column('quantity', quantity, 'right', spans[1]),
        Column('rate', rate, 'right', spans[2]),
        Column('amount', amount, 'right', spans[3]),
    )


@register
class ModernTemplate(TemplateVariant):
    """Dark header band, ruled table, narrow right-hand totals column."""

    variant_id = 'modern'
    name = 'Modern'
    description = 'Clean and contemporary'
    page_style = ('padded',)

    def header(self, document):
        company = document.company
        return Block('header', (
            Block('company', logo_nodes(company) + (
                Text(company.name, 'title'),
                Text(company.address, 'muted'),
                Text(company.email, 'muted'),
                Text(company.phone, 'muted'),
            )),
            Block('document_number', (
                Text('INVOICE', 'label'),
                Text(document.bill_number, 'strong'),
            ), style=('card', 'align-right')),
        ), style=('band-dark',))

    def bill_to(self, document):
        client = document.client
        return Block('bill_to', (
            Block('client', (
                Text('Bill To', 'heading'),
                Text(client.name, 'strong'),
                Text(client.address, 'muted'),
                Text(client.email, 'muted'),
            )),
            Block('metadata', (
                Field('Issue Date', format_date(document.bill_date)),
                Field('Due Date', format_date(document.due_date)),
            ), style=('align-right',)),
        ), style=('columns-2',))

    def items(self, document):
        return Block('items', (
            item_table(
                document,
                _columns('Description', 'Quantity', 'Rate', 'Amount'),
                style=('ruled', 'header-rule-heavy'),
            ),
        ))

    def totals(self, document, totals):
        return Block('totals', adjustment_rows(document, totals) + (
            grand_total(document, totals, 'Total', style=('rule-above',)),
        ), style=('align-right', 'narrow'))

    def notes(self, document):
        return Block('notes', (
            Text('Notes', 'heading'),
            Text(document.notes, 'preformatted'),
        ), style=('rule-above',))


@register
class ClassicTemplate(TemplateVariant):
    """Bordered full-width table with alternating rows and a boxed total."""

    variant_id = 'classic'
    name = 'Classic'
    description = 'Traditional professional'
    page_style = ('padded',)

    def header(self, document):
        company = document.company
        return Block('header', (
            Block('company', logo_nodes(company) + (
                Text(company.name, 'title'),
                Text(company.address, 'muted'),
                Text(company.email, 'muted'),
                Text(company.phone, 'muted'),
            )),
            Block('document_number', (
                Text('INVOICE', 'heading'),
                Text(f"#{document.bill_number}", 'muted'),
            ), style=('align-right',)),
        ), style=('rule-below-heavy',))

    def bill_to(self, document):
        client = document.client
        return Block('bill_to', (
            Block('client', (
                Text('Bill To', 'heading'),
                Text(client.name, 'strong'),
                Text(client.address, 'muted'),
                Text(client.email, 'muted'),
            ), style=('accent-bar',)),
            Block('metadata', (
                Text('Invoice Details', 'heading'),
                Field('Issue Date', format_date(document.bill_date)),
                Field('Due Date', format_date(document.due_date)),
                Field('Currency', document.currency),
            ), style=('accent-bar-light',)),
        ), style=('columns-2',))

    def items(self, document):
        return Block('items', (
            item_table(
                document,
                _columns('Description', 'Qty', 'Rate', 'Amount'),
                style=('bordered', 'full-width', 'header-dark'),
                row_style=lambda index: ('shaded',) if index % 2 else (),
            ),
        ))

    def totals(self, document, totals):
        return Block('totals', adjustment_rows(
            document, totals, style=('rule-below',)
        ) + (
            grand_total(document, totals, 'Total Amount',
                        style=('slab', 'bordered')),
        ), style=('align-right', 'boxed'))

    def notes(self, document):
        return Block('notes', (
            Text('Notes & Terms', 'heading'),
            Text(document.notes, 'preformatted'),
        ), style=('rule-above-heavy',))


@register
class MinimalistTemplate(TemplateVariant):
    """Borderless column grid, thin rule dividers, wide margins."""

    variant_id = 'minimalist'
    name = 'Minimalist'
    description = 'Simple and elegant'
    page_style = ('wide-margins', 'centered')

    def header(self, document):
        company = document.company
        return Block('header', logo_nodes(company) + (
            Text(company.name, 'title'),
            Block('contact', (
                Text(company.email, 'muted'),
                Text(company.phone, 'muted'),
            )),
            Block('document_number', (
                Text('Invoice', 'muted'),
                Text(document.bill_number, 'strong'),
            ), style=('align-right',)),
            Rule('thin'),
        ))

    def bill_to(self, document):
        client = document.client
        return Block('bill_to', (
            Block('client', (
                Text('To', 'label'),
                Text(client.name, 'strong'),
                Text(client.email, 'muted'),
            )),
            Block('metadata', (
                Field('Issued', format_date(document.bill_date)),
                Field('Due', format_date(document.due_date)),
            ), style=('align-right',)),
        ), style=('columns-2', 'gap-wide'))

    def items(self, document):
        return Block('items', (
            item_table(
                document,
                _columns('Item', 'Qty', 'Rate', 'Amount', spans=(6, 2, 2, 2)),
                style=('column-grid', 'borderless', 'header-rule-thin'),
            ),
        ))

    def totals(self, document, totals):
        return Block('totals', (Rule('thin'),) + adjustment_rows(
            document, totals
        ) + (
            Rule('thin'),
            grand_total(document, totals, 'Total'),
        ), style=('align-right', 'narrow'))

    def notes(self, document):
        return Block('notes', (
            Text('Notes', 'label'),
            Text(document.notes, 'preformatted'),
        ))


@register
class CorporateTemplate(TemplateVariant):
    """Dark header with an inset number card and a solid total block."""

    variant_id = 'corporate'
    name = 'Corporate'
    description = 'Bold and structured'
    page_style = ('padded',)

    def header(self, document):
        company = document.company
        return Block('header', (
            Block('company', logo_nodes(company) + (
                Text(company.name, 'title'),
                Text(company.address, 'muted'),
                Text(f"{company.email} • {company.phone}", 'muted'),
            )),
            Block('document_number', (
                Text('INVOICE', 'label'),
                Text(document.bill_number, 'strong'),
            ), style=('card', 'inset')),
        ), style=('band-dark',))

    def bill_to(self, document):
        client = document.client
        return Block('bill_to', (
            Block('client', (
                Text('BILL TO', 'label'),
                Text(client.name, 'strong'),
                Text(client.address, 'muted'),
                Text(client.email, 'muted'),
            ), style=('span-2', 'accent-bar')),
            Block('metadata', (
                Field('Issue Date', format_date(document.bill_date),
                      style=('stacked',)),
                Field('Due Date', format_date(document.due_date),
                      style=('stacked',)),
            ), style=('span-1',)),
        ), style=('columns-3',))

    def items(self, document):
        return Block('items', (
            item_table(
                document,
                _columns('DESCRIPTION', 'QTY', 'RATE', 'AMOUNT'),
                style=('ruled', 'header-shaded'),
            ),
        ))

    def totals(self, document, totals):
        return Block('totals', adjustment_rows(
            document, totals, style=('rule-below',)
        ) + (
            grand_total(document, totals, 'TOTAL DUE',
                        style=('solid-emphasis',)),
        ), style=('align-right', 'wide'))

    def notes(self, document):
        return Block('notes', (
            Text('NOTES', 'label'),
            Text(document.notes, 'preformatted'),
        ), style=('accent-bar',))

    def footer(self, document):
        return Block('footer', (
            Text('Thank you for your business', 'muted'),
        ), style=('rule-above', 'centered'))
