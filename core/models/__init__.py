"""Core domain models."""

from core.models.customer import Customer, CustomerField
from core.models.invoice import (
    Invoice,
    InvoiceForEdit,
    InvoiceForm,
    InvoiceInput,
    InvoiceStatus,
    InvoiceTableRow,
)
from core.models.form_state import (
    ActionCompleted,
    ActionFailed,
    ActionResult,
    ActionSucceeded,
    DeleteResult,
    FormActionState,
)

__all__ = [
    # Customer
    "Customer", "CustomerField",
    # Invoice
    "Invoice", "InvoiceForEdit", "InvoiceForm", "InvoiceInput", "InvoiceStatus", "InvoiceTableRow",
    # Form outcomes
    "ActionCompleted", "ActionFailed", "ActionResult", "ActionSucceeded", "DeleteResult",
    "FormActionState",
]
