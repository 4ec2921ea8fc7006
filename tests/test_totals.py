"""Tests for the totals engine."""

import pytest

from billing.models import LineItem
from billing.totals import Totals, compute_totals


class TestComputeTotals:
    """Tests for compute_totals."""

    @pytest.fixture
    def items(self):
        return [
            LineItem('1', 'A', quantity=1, rate=100),
            LineItem('2', 'B', quantity=2, rate=75),
        ]

    def test_tax_only(self, items):
        """Test 10% tax and no discount."""
        totals = compute_totals(items, 10, 0)

        assert totals.subtotal == 250
        assert totals.discount_amount == 0
        assert totals.tax_amount == 25
        assert totals.total == 275

    def test_discount_only(self, items):
        """Test 20% discount and no tax."""
        totals = compute_totals(items, 0, 20)

        assert totals.subtotal == 250
        assert totals.discount_amount == 50
        assert totals.tax_amount == 0
        assert totals.total == 200

    def test_tax_applies_to_pre_discount_subtotal(self, items):
        """Test tax is computed from the subtotal, not the discounted amount."""
        totals = compute_totals(items, 10, 20)

        assert totals.tax_amount == 25
        assert totals.discount_amount == 50
        assert totals.total == 225

    def test_empty_items(self):
        """Test an empty bill totals zero."""
        totals = compute_totals([], 10, 20)

        assert totals == Totals(0, 0, 0, 0)

    def test_no_rounding(self):
        """Test values are not rounded inside the engine."""
        items = [LineItem('1', 'A', quantity=3, rate=0.333)]

        totals = compute_totals(items, 7.5, 0)

        assert totals.subtotal == pytest.approx(0.999)
        assert totals.tax_amount == pytest.approx(0.074925)

    def test_out_of_range_percentages_pass_through(self, items):
        totals = compute_totals(items, 150, -10)

        assert totals.tax_amount == 375
        assert totals.discount_amount == -25
        assert totals.total == 650

    @pytest.mark.parametrize('tax, discount', [
        (0, 0), (5, 0), (0, 12.5), (8.25, 3), (19, 50),
    ])
    def test_total_identity(self, items, tax, discount):
        totals = compute_totals(items, tax, discount)

        assert totals.total == pytest.approx(
            totals.subtotal - totals.discount_amount + totals.tax_amount
        )
        assert totals.tax_amount == pytest.approx(totals.subtotal * tax / 100)

    def test_accepts_any_iterable(self, items):
        assert compute_totals(iter(items), 0, 0).subtotal == 250

    def test_to_dict(self, items):
        assert compute_totals(items, 10, 0).to_dict() == {
            'subtotal': 250,
            'discount_amount': 0,
            'tax_amount': 25,
            'total': 275,
        }
