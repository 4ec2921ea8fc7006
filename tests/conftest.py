"""Shared fixtures for bill tests."""

from datetime import date

import pytest

from billing.models import BillDocument, Client, Company, LineItem

TODAY = date(2024, 1, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_document():
    """Two items (1 x 100, 2 x 75) with 10% tax and no discount."""
    return BillDocument(
        company=Company(
            name='Acme Ltd',
            address='1 Main Street',
            email='billing@acme.test',
            phone='555-0100',
        ),
        client=Client(
            name='Globex',
            address='9 Side Road',
            email='ap@globex.test',
        ),
        bill_number='INV-007',
        bill_date='2024-01-15',
        due_date='2024-02-14',
        currency='USD',
        items=(
            LineItem('1', 'Design work', quantity=1, rate=100),
            LineItem('2', 'Consulting', quantity=2, rate=75),
        ),
        notes='Payable within 30 days.',
        tax=10,
        discount=0,
    )
