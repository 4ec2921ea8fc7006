"""Bill document parsing.

This module builds bill documents from plain data (dicts, JSON strings
and JSON files), as supplied by the editor or read back from storage.
"""

import json
import re
from datetime import date
from typing import Any, Optional

from .models import (
    BillDocument,
    Client,
    Company,
    LineItem,
    default_bill,
    new_item_id,
)


class DocumentParser:
    """Builds BillDocument objects from plain data.

    Missing fields fall back to the default document, and numbers that
    cannot be read are coerced to zero rather than rejected. Only
    structural problems (wrong container types, invalid JSON) raise.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def parse_from_dict(self, data: dict[str, Any]) -> BillDocument:
        """Build a bill document from a dictionary.

        Args:
            data: Dictionary with any of the keys:
                - company: dict with name, address, email, phone, logo
                - client: dict with name, address, email
                - bill_number, bill_date, due_date, currency
                - items: list of dicts with id, description, quantity, rate
                - notes: free text
                - tax, discount: percentages

        Returns:
            A BillDocument. An ``amount`` given for an item is ignored;
            it is always derived from quantity and rate.

        Raises:
            ValueError: If the payload or one of its sections has the
                wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError("Bill data must be an object")

        defaults = default_bill(self.today)
        company = self._parse_company(
            self._section(data, 'company'), defaults.company
        )
        client = self._parse_client(
            self._section(data, 'client'), defaults.client
        )

        items_data = data.get('items')
        if items_data is None:
            items = defaults.items
        elif isinstance(items_data, list):
            items = self._parse_items(items_data)
        else:
            raise ValueError("items must be a list")

        return BillDocument(
            company=company,
            client=client,
            bill_number=self._text(data, 'bill_number', defaults.bill_number),
            bill_date=self._text(data, 'bill_date', defaults.bill_date),
            due_date=self._text(data, 'due_date', defaults.due_date),
            currency=self._text(data, 'currency', defaults.currency),
            items=items,
            notes=self._text(data, 'notes', defaults.notes),
            tax=self._parse_number(data.get('tax', defaults.tax)),
            discount=self._parse_number(
                data.get('discount', defaults.discount)
            ),
        )

    def parse_from_json(self, json_str: str) -> BillDocument:
        """Build a bill document from a JSON string.

        Raises:
            ValueError: If JSON is invalid or has the wrong shape.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e

        return self.parse_from_dict(data)

    def parse_from_json_file(self, file_path: str) -> BillDocument:
        """Build a bill document from a JSON file.

        Raises:
            ValueError: If the file contains invalid data.
            FileNotFoundError: If file does not exist.
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            return self.parse_from_json(f.read())

    def parse_item(self, item: dict[str, Any]) -> LineItem:
        """Build one line item, generating an id when none is given."""
        if not isinstance(item, dict):
            raise ValueError("Each line item must be an object")
        return LineItem(
            id=str(item.get('id') or new_item_id()),
            description=self._text(item, 'description', ''),
            quantity=self._parse_number(item.get('quantity', 1)),
            rate=self._parse_number(item.get('rate', 0)),
        )

    def parse_item_changes(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Normalize a partial line-item edit.

        Raises:
            ValueError: If the payload is not an object.
        """
        if not isinstance(changes, dict):
            raise ValueError("Item changes must be an object")
        normalized = {}
        for key, value in changes.items():
            if key in ('quantity', 'rate'):
                normalized[key] = self._parse_number(value)
            elif key == 'description':
                normalized[key] = '' if value is None else str(value)
            else:
                normalized[key] = value
        return normalized

    def _parse_items(self, items_data: list) -> list[LineItem]:
        return [self.parse_item(item) for item in items_data]

    def _parse_company(self, data: dict, fallback: Company) -> Company:
        logo = data.get('logo', fallback.logo)
        return Company(
            name=self._text(data, 'name', fallback.name),
            address=self._text(data, 'address', fallback.address),
            email=self._text(data, 'email', fallback.email),
            phone=self._text(data, 'phone', fallback.phone),
            logo=str(logo) if logo else None,
        )

    def _parse_client(self, data: dict, fallback: Client) -> Client:
        return Client(
            name=self._text(data, 'name', fallback.name),
            address=self._text(data, 'address', fallback.address),
            email=self._text(data, 'email', fallback.email),
        )

    @staticmethod
    def _section(data: dict, key: str) -> dict:
        section = data.get(key)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"{key} must be an object")
        return section

    @staticmethod
    def _text(data: dict, key: str, default: str) -> str:
        value = data.get(key)
        if value is None:
            return default
        return str(value)

    @staticmethod
    def _parse_number(value: Any) -> float:
        """Parse a value into a float.

        Handles strings with currency symbols, commas, etc. Anything
        that still cannot be read as a number becomes 0.

        Args:
            value: The value to parse (string, int, float or None).

        Returns:
            Float representation of the value.
        """
        if isinstance(value, bool):
            return 0.0

        if isinstance(value, (int, float)):
            return float(value)

        if isinstance(value, str):
            # Remove currency symbols, commas, and whitespace
            cleaned = re.sub(r'[^\d.-]', '', value)
            try:
                return float(cleaned)
            except ValueError:
                return 0.0

        return 0.0
