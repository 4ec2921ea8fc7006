"""The live bill and the selected template.

Exactly one document is live at a time. Every change replaces it with a
new document value and persists the whole document.
"""

import logging
from datetime import date
from typing import Callable, Optional

from .layout import RenderedBill
from .models import BillDocument, default_bill
from .parser import DocumentParser
from .renderer import TemplateRegistry, registry as default_registry
from .summary import BillSummarizer, BillSummary

logger = logging.getLogger(__name__)

BILL_KEY = 'billData'
TEMPLATE_KEY = 'selectedTemplate'


class BillWorkspace:
    """Holds the live bill document on top of a keyed store.

    Args:
        store: Object with ``load(key, default)`` and ``save(key, value)``.
        templates: Registry used for template selection and rendering.
        default_template: Template id used until one is selected.
        clock: Returns today's date; replaceable for tests.
    """

    def __init__(self, store, templates: TemplateRegistry = None,
                 default_template: Optional[str] = None,
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.templates = templates or default_registry
        self.default_template = self.templates.resolve(
            default_template or self.templates.default_id
        )
        self.clock = clock
        self.summarizer = BillSummarizer()

    @property
    def document(self) -> BillDocument:
        """The live document, loaded from the store on every read."""
        data = self.store.load(BILL_KEY, None)
        if data is None:
            return default_bill(self.clock())
        try:
            return DocumentParser(self.clock()).parse_from_dict(data)
        except ValueError as e:
            logger.warning(f"Stored bill is malformed, using default: {str(e)}")
            return default_bill(self.clock())

    def replace(self, document: BillDocument) -> BillDocument:
        """Make ``document`` the live document."""
        self.store.save(BILL_KEY, document.to_dict())
        return document

    def edit(self, change: Callable[[BillDocument], BillDocument]) -> BillDocument:
        """Apply a document-to-document change and store the result."""
        return self.replace(change(self.document))

    def new_bill(self) -> BillDocument:
        """Start the next bill from the current one."""
        current = self.document
        document = self.replace(current.next_bill(self.clock()))
        logger.info(
            f"Started bill {document.bill_number} after {current.bill_number}"
        )
        return document

    def reset(self) -> BillDocument:
        """Replace the live document with the default one."""
        logger.info("Resetting bill to defaults")
        return self.replace(default_bill(self.clock()))

    @property
    def selected_template(self) -> str:
        return self.templates.resolve(
            self.store.load(TEMPLATE_KEY, self.default_template)
        )

    def select_template(self, variant_id: str) -> str:
        """Store the selected template id.

        Raises:
            ValueError: If no variant has this id.
        """
        if variant_id not in self.templates:
            raise ValueError(f"Unknown template: {variant_id}")
        self.store.save(TEMPLATE_KEY, variant_id)
        return variant_id

    def render(self, variant_id: Optional[str] = None) -> RenderedBill:
        """Render the live document, with the selected template by default."""
        return self.templates.render(
            self.document, variant_id or self.selected_template
        )

    def summary(self) -> BillSummary:
        return self.summarizer.summarize(self.document)
