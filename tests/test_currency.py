"""Tests for currency symbol lookup."""

import pytest

from billing.currency import FALLBACK_SYMBOL, currency_choices, symbol_for


class TestSymbolFor:

    @pytest.mark.parametrize('code, symbol', [
        ('USD', '$'),
        ('EUR', '€'),
        ('GBP', '£'),
        ('JPY', '¥'),
        ('INR', '₹'),
        ('CAD', '$'),
        ('AUD', '$'),
    ])
    def test_known_codes(self, code, symbol):
        assert symbol_for(code) == symbol

    @pytest.mark.parametrize('code', ['XYZ', 'usd', '', None, 'CHF'])
    def test_unknown_codes_fall_back(self, code):
        """Test unknown codes never raise and use the fallback glyph."""
        assert symbol_for(code) == FALLBACK_SYMBOL == '$'


class TestCurrencyChoices:

    def test_choices(self):
        choices = currency_choices()

        assert [c['value'] for c in choices] == [
            'USD', 'EUR', 'GBP', 'JPY', 'INR', 'CAD', 'AUD'
        ]
        assert choices[1] == {'value': 'EUR', 'label': '€ EUR', 'symbol': '€'}
