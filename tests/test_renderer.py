"""Tests for template rendering."""

import pytest

from billing.layout import Block, Field, Image, RenderedBill, Row, Table, Text
from billing.models import BillDocument
from billing.renderer import (
    DEFAULT_VARIANT,
    EMPTY_ITEMS_TEXT,
    TemplateRegistry,
    TemplateVariant,
    available_templates,
    registry,
    render,
)

VARIANTS = ['modern', 'classic', 'minimalist', 'corporate']


def fields_by_key(rendered):
    return {
        node.key: node for node in rendered.walk()
        if isinstance(node, Field) and node.key
    }


def texts(rendered):
    return [node.value for node in rendered.walk() if isinstance(node, Text)]


class TestRegistry:
    """Tests for the default template registry."""

    def test_builtin_variants_registered(self):
        assert registry.ids() == VARIANTS

    def test_default_variant(self):
        assert DEFAULT_VARIANT == 'modern'
        assert registry.default_id == 'modern'

    def test_available_templates(self):
        templates = available_templates()

        assert templates[0] == {
            'id': 'modern',
            'name': 'Modern',
            'description': 'Clean and contemporary',
        }
        assert [t['id'] for t in templates] == VARIANTS

    @pytest.mark.parametrize('variant_id', [
        'unknown', '', None, 'MODERN', ['modern'], {'id': 'modern'}, 7,
    ])
    def test_unknown_variant_renders_as_default(self, sample_document,
                                                variant_id):
        """Test unknown ids fall back to the default variant."""
        assert render(sample_document, variant_id) == \
            render(sample_document, 'modern')

    def test_contains_ignores_non_string_ids(self):
        assert 'classic' in registry
        assert ['classic'] not in registry
        assert None not in registry

    def test_register_duplicate_rejected(self):
        local = TemplateRegistry()

        class Plain(TemplateVariant):
            variant_id = 'plain'

            def header(self, document):
                return Block('header')

            def bill_to(self, document):
                return Block('bill_to')

            def items(self, document):
                return Block('items')

            def totals(self, document, totals):
                return Block('totals')

            def notes(self, document):
                return Block('notes')

        local.register(Plain)
        with pytest.raises(ValueError):
            local.register(Plain)

    def test_register_requires_id(self):
        local = TemplateRegistry()

        class Nameless(TemplateVariant):
            header = bill_to = items = totals = notes = None

        with pytest.raises(ValueError):
            local.register(Nameless)

    def test_new_variant_uses_shared_totals(self, sample_document):
        """Test a newly registered variant receives the engine's totals."""
        local = TemplateRegistry(default_id='receipt')
        seen = []

        @local.register
        class Receipt(TemplateVariant):
            variant_id = 'receipt'

            def header(self, document):
                return Block('header')

            def bill_to(self, document):
                return Block('bill_to')

            def items(self, document):
                return Block('items')

            def totals(self, document, totals):
                seen.append(totals)
                return Block('totals')

            def notes(self, document):
                return Block('notes')

        rendered = local.render(sample_document, 'anything')

        assert rendered.variant == 'receipt'
        assert seen == [sample_document.totals()]


@pytest.mark.parametrize('variant_id', VARIANTS)
class TestVariants:
    """Behaviour shared by every built-in variant."""

    def test_sections(self, sample_document, variant_id):
        rendered = render(sample_document, variant_id)

        assert isinstance(rendered, RenderedBill)
        assert rendered.variant == variant_id
        assert rendered.section_names()[:5] == [
            'header', 'bill_to', 'items', 'totals', 'notes'
        ]

    def test_deterministic(self, sample_document, variant_id):
        """Test the same document always renders the same tree."""
        assert render(sample_document, variant_id) == \
            render(sample_document, variant_id)
        assert render(sample_document, variant_id).to_dict() == \
            render(sample_document, variant_id).to_dict()

    def test_does_not_modify_document(self, sample_document, variant_id):
        before = sample_document.to_dict()

        render(sample_document, variant_id)

        assert sample_document.to_dict() == before

    def test_totals_with_tax(self, sample_document, variant_id):
        """Test 10% tax on 250: tax row shown, discount row omitted."""
        rows = fields_by_key(render(sample_document, variant_id))

        assert rows['subtotal'].value == '$250.00'
        assert rows['tax'].value == '$25.00'
        assert rows['tax'].label == 'Tax (10%)'
        assert rows['total'].value == '$275.00'
        assert 'discount' not in rows

    def test_totals_with_discount(self, sample_document, variant_id):
        """Test 20% discount: discount row shown, tax row omitted."""
        document = sample_document.replace(tax=0, discount=20)

        rows = fields_by_key(render(document, variant_id))

        assert rows['discount'].value == '-$50.00'
        assert rows['discount'].label == 'Discount (20%)'
        assert rows['total'].value == '$200.00'
        assert 'tax' not in rows

    def test_empty_document(self, sample_document, variant_id):
        """Test zero items: zero totals, no table, no optional rows."""
        document = sample_document.replace(items=(), tax=0, discount=0)

        rendered = render(document, variant_id)
        rows = fields_by_key(rendered)

        assert set(rows) == {'subtotal', 'total'}
        assert rows['subtotal'].value == '$0.00'
        assert rows['total'].value == '$0.00'
        assert not any(isinstance(n, Table) for n in rendered.walk())
        assert EMPTY_ITEMS_TEXT in texts(rendered)

    def test_empty_items_hide_optional_rows_when_percentages_zero(
            self, variant_id):
        rows = fields_by_key(render(BillDocument(), variant_id))

        assert 'tax' not in rows
        assert 'discount' not in rows

    def test_item_rows(self, sample_document, variant_id):
        rendered = render(sample_document, variant_id)
        table = next(n for n in rendered.walk() if isinstance(n, Table))

        assert len(table.columns) == 4
        assert [row.item_id for row in table.rows] == ['1', '2']
        assert table.rows[1].cells == ('Consulting', '2', '$75.00', '$150.00')

    def test_unknown_currency_uses_fallback_glyph(self, sample_document,
                                                  variant_id):
        document = sample_document.replace(currency='XYZ')

        rows = fields_by_key(render(document, variant_id))

        assert rows['total'].value == '$275.00'

    def test_currency_symbol(self, sample_document, variant_id):
        document = sample_document.replace(currency='GBP')

        rows = fields_by_key(render(document, variant_id))

        assert rows['total'].value == '£275.00'

    def test_blank_notes_omitted(self, sample_document, variant_id):
        document = sample_document.replace(notes='  ')

        assert 'notes' not in render(document, variant_id).section_names()

    def test_logo_included(self, sample_document, variant_id):
        document = sample_document.with_company(logo='data:image/png;base64,AA')

        images = [n for n in render(document, variant_id).walk()
                  if isinstance(n, Image)]

        assert images == [Image('data:image/png;base64,AA', 'Acme Ltd')]

    def test_no_logo(self, sample_document, variant_id):
        rendered = render(sample_document, variant_id)

        assert not any(isinstance(n, Image) for n in rendered.walk())

    def test_content_is_shared(self, sample_document, variant_id):
        """Test every variant shows the same parties and number."""
        values = ' '.join(texts(render(sample_document, variant_id)))

        assert 'Acme Ltd' in values
        assert 'Globex' in values
        assert 'INV-007' in values
        assert 'Payable within 30 days.' in values


class TestVariantLayouts:
    """Tests for the distinguishing layout policy of each variant."""

    def test_modern(self, sample_document):
        rendered = render(sample_document, 'modern')

        assert 'band-dark' in rendered.section('header').style
        assert 'narrow' in rendered.section('totals').style
        table = rendered.section('items').children[0]
        assert 'ruled' in table.style

    def test_classic(self, sample_document):
        document = sample_document.add_item()
        rendered = render(document, 'classic')

        table = rendered.section('items').children[0]
        assert 'bordered' in table.style
        assert [row.style for row in table.rows] == [(), ('shaded',), ()]
        total = fields_by_key(rendered)['total']
        assert total.label == 'Total Amount'
        assert 'slab' in total.style
        assert 'USD' in [n.value for n in rendered.walk()
                         if isinstance(n, Field)]

    def test_minimalist(self, sample_document):
        rendered = render(sample_document, 'minimalist')

        assert 'wide-margins' in rendered.style
        table = rendered.section('items').children[0]
        assert 'borderless' in table.style
        assert [c.span for c in table.columns] == [6, 2, 2, 2]
        assert '9 Side Road' not in texts(rendered)

    def test_corporate(self, sample_document):
        rendered = render(sample_document, 'corporate')

        header = rendered.section('header')
        assert 'band-dark' in header.style
        assert 'inset' in header.find('document_number').style
        bill_to = rendered.section('bill_to')
        assert 'span-2' in bill_to.find('client').style
        assert 'span-1' in bill_to.find('metadata').style
        total = fields_by_key(rendered)['total']
        assert total.label == 'TOTAL DUE'
        assert 'solid-emphasis' in total.style
        assert rendered.section_names()[-1] == 'footer'


class TestLayoutTree:

    def test_to_dict(self):
        bill = RenderedBill('modern', (
            Block('items', (Table((), (Row('1', ('a', 'b')),)),)),
        ))

        data = bill.to_dict()

        assert data['type'] == 'bill'
        assert data['sections'][0]['type'] == 'block'
        row = data['sections'][0]['children'][0]['rows'][0]
        assert row == {'type': 'row', 'item_id': '1', 'cells': ['a', 'b'],
                       'style': []}
