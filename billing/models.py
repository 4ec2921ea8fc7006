"""Data models for bill documents.

This module defines line items, the company and client parties, and the
bill document aggregate. All of them are immutable values: every edit
returns a new object, so a document is replaced as a whole and never
observed half-updated.
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from .currency import symbol_for
from .totals import Totals, compute_totals

DEFAULT_ITEM_DESCRIPTION = 'New Item'
DEFAULT_NOTES = 'Thank you for your business!'
DEFAULT_BILL_PREFIX = 'INV'
BILL_NUMBER_SEPARATOR = '-'
PAYMENT_TERM_DAYS = 30

EDITABLE_ITEM_FIELDS = ('description', 'quantity', 'rate')


class ItemNotFound(KeyError):
    """Raised when a bill has no line item with the requested id."""


def derive_amount(quantity: float, rate: float) -> float:
    """Amount of a line item: quantity times rate."""
    return quantity * rate


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class LineItem:
    """Represents a single billable row.

    ``amount`` is not an init argument. It is derived from quantity and
    rate whenever an item is built, and ``update`` builds a new item, so
    the cached value can never go stale.

    Attributes:
        id: Identifier, unique within a document
        description: Description of the item/service
        quantity: Number of units
        rate: Price per unit
        amount: quantity * rate
    """
    id: str
    description: str = DEFAULT_ITEM_DESCRIPTION
    quantity: float = 1.0
    rate: float = 0.0
    amount: float = field(init=False)

    def __post_init__(self):
        """Normalize numbers and derive the amount."""
        object.__setattr__(self, 'id', str(self.id))
        object.__setattr__(self, 'quantity', float(self.quantity))
        object.__setattr__(self, 'rate', float(self.rate))
        object.__setattr__(
            self, 'amount', derive_amount(self.quantity, self.rate)
        )

    def update(self, **changes) -> 'LineItem':
        """Return a copy with the given fields changed.

        Only description, quantity and rate are editable.

        Raises:
            ValueError: If a non-editable field is named.
        """
        unknown = set(changes) - set(EDITABLE_ITEM_FIELDS)
        if unknown:
            raise ValueError(
                f"Cannot edit line item field(s): {', '.join(sorted(unknown))}"
            )
        return dataclasses.replace(self, **changes)

    def duplicate(self, new_id: Optional[str] = None) -> 'LineItem':
        """Copy every field except the identifier."""
        return dataclasses.replace(self, id=new_id or new_item_id())

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'description': self.description,
            'quantity': self.quantity,
            'rate': self.rate,
            'amount': self.amount,
        }


def new_line_item() -> LineItem:
    """Create a blank line item with a fresh identifier."""
    return LineItem(id=new_item_id())


@dataclass(frozen=True)
class Company:
    """The issuing company."""
    name: str = ''
    address: str = ''
    email: str = ''
    phone: str = ''
    logo: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'address': self.address,
            'email': self.email,
            'phone': self.phone,
            'logo': self.logo,
        }


@dataclass(frozen=True)
class Client:
    """The billed party."""
    name: str = ''
    address: str = ''
    email: str = ''

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'address': self.address,
            'email': self.email,
        }


@dataclass(frozen=True)
class BillDocument:
    """Represents one complete bill.

    Totals are not stored; ``totals()`` recomputes them from the current
    items on every call.

    Attributes:
        company: Issuing company identity
        client: Billed client identity
        bill_number: Human-facing number, e.g. "INV-007"
        bill_date: Issue date (ISO format)
        due_date: Due date (ISO format), not required to follow bill_date
        currency: Currency code, used for the display symbol only
        items: Ordered line items
        notes: Free-text notes
        tax: Tax percentage, unclamped
        discount: Discount percentage, unclamped
    """
    company: Company = field(default_factory=Company)
    client: Client = field(default_factory=Client)
    bill_number: str = f"{DEFAULT_BILL_PREFIX}-001"
    bill_date: str = ''
    due_date: str = ''
    currency: str = 'USD'
    items: tuple = ()
    notes: str = ''
    tax: float = 0.0
    discount: float = 0.0

    def __post_init__(self):
        """Freeze the item sequence and reject duplicate identifiers."""
        items = tuple(self.items)
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValueError("Line item ids must be unique within a bill")
        object.__setattr__(self, 'items', items)
        object.__setattr__(self, 'tax', float(self.tax))
        object.__setattr__(self, 'discount', float(self.discount))

    @property
    def currency_symbol(self) -> str:
        return symbol_for(self.currency)

    def totals(self) -> Totals:
        """Compute the bill totals from the current items."""
        return compute_totals(self.items, self.tax, self.discount)

    def replace(self, **changes) -> 'BillDocument':
        """Return a new document with top-level fields replaced."""
        return dataclasses.replace(self, **changes)

    def with_company(self, **changes) -> 'BillDocument':
        company = dataclasses.replace(self.company, **changes)
        return dataclasses.replace(self, company=company)

    def with_client(self, **changes) -> 'BillDocument':
        client = dataclasses.replace(self.client, **changes)
        return dataclasses.replace(self, client=client)

    def get_item(self, item_id: str) -> LineItem:
        """Look up a line item.

        Raises:
            ItemNotFound: If no item has this id.
        """
        for item in self.items:
            if item.id == item_id:
                return item
        raise ItemNotFound(item_id)

    def add_item(self, item: Optional[LineItem] = None) -> 'BillDocument':
        """Append an item, a blank one if none is given."""
        items = self.items + (item or new_line_item(),)
        return dataclasses.replace(self, items=items)

    def update_item(self, item_id: str, **changes) -> 'BillDocument':
        """Edit one item in place in the sequence.

        Raises:
            ItemNotFound: If no item has this id.
            ValueError: If a non-editable field is named.
        """
        updated = self.get_item(item_id).update(**changes)
        return dataclasses.replace(self, items=tuple(
            updated if item.id == item_id else item for item in self.items
        ))

    def remove_item(self, item_id: str) -> 'BillDocument':
        """Drop one item.

        Raises:
            ItemNotFound: If no item has this id.
        """
        self.get_item(item_id)
        return dataclasses.replace(self, items=tuple(
            item for item in self.items if item.id != item_id
        ))

    def duplicate_item(self, item_id: str) -> 'BillDocument':
        """Append a copy of an item under a new id.

        Raises:
            ItemNotFound: If no item has this id.
        """
        return self.add_item(self.get_item(item_id).duplicate())

    def next_bill(self, today: Optional[date] = None) -> 'BillDocument':
        """Derive the document for the next bill.

        Company identity, currency and tax rate carry over; client,
        items and discount are cleared and the bill number moves on.
        """
        bill_date, due_date = _default_dates(today)
        return dataclasses.replace(
            self,
            client=Client(),
            bill_number=next_bill_number(self.bill_number),
            bill_date=bill_date,
            due_date=due_date,
            items=(),
            notes=DEFAULT_NOTES,
            discount=0.0,
        )

    def to_dict(self) -> dict:
        """Convert the document to plain JSON-compatible data."""
        return {
            'company': self.company.to_dict(),
            'client': self.client.to_dict(),
            'bill_number': self.bill_number,
            'bill_date': self.bill_date,
            'due_date': self.due_date,
            'currency': self.currency,
            'items': [item.to_dict() for item in self.items],
            'notes': self.notes,
            'tax': self.tax,
            'discount': self.discount,
        }


def next_bill_number(bill_number: str) -> str:
    """Increment the numeric suffix after the last separator.

    "INV-007" becomes "INV-008". A missing or non-numeric suffix counts
    as 1, so "INV-abc" becomes "INV-002"; without any separator the
    default prefix is used. Zero padding keeps at least three digits.
    """
    prefix, sep, suffix = bill_number.rpartition(BILL_NUMBER_SEPARATOR)
    if not sep:
        prefix, suffix = DEFAULT_BILL_PREFIX, ''
    if suffix.isdecimal():
        number, width = int(suffix), max(3, len(suffix))
    else:
        number, width = 1, 3
    return f"{prefix}{BILL_NUMBER_SEPARATOR}{number + 1:0{width}d}"


def _default_dates(today: Optional[date]) -> tuple[str, str]:
    today = today or date.today()
    due = today + timedelta(days=PAYMENT_TERM_DAYS)
    return today.isoformat(), due.isoformat()


def default_bill(today: Optional[date] = None) -> BillDocument:
    """Build the starting document used on first run and on reset."""
    bill_date, due_date = _default_dates(today)
    return BillDocument(
        company=Company(
            name='Your Company Name',
            address='123 Business Street, City, State 12345',
            email='hello@yourcompany.com',
            phone='+1 (555) 123-4567',
        ),
        client=Client(
            name='Client Name',
            address='456 Client Avenue, City, State 67890',
            email='client@email.com',
        ),
        bill_number=f"{DEFAULT_BILL_PREFIX}-001",
        bill_date=bill_date,
        due_date=due_date,
        currency='USD',
        items=(
            LineItem('1', 'Service or Product 1', quantity=1, rate=100),
            LineItem('2', 'Service or Product 2', quantity=2, rate=75),
        ),
        notes=DEFAULT_NOTES,
        tax=10,
        discount=0,
    )
