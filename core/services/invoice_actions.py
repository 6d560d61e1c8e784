"""
Invoice mutation commands: create, update, delete.

Each command validates the submitted form, performs exactly one store write,
and on success invalidates the invoices listing before returning. Store
failures are caught here and turned into a FormActionState message; they
never reach the HTTP layer as raw errors. Success is a returned value: the
caller performs the navigation, nothing is raised to signal it.
"""

import logging
from typing import Mapping
from uuid import UUID

import psycopg2

from core.cache import ListingCache
from core.config import DashboardConfig
from core.models import (
    ActionCompleted,
    ActionFailed,
    ActionResult,
    ActionSucceeded,
    DeleteResult,
    FormActionState,
)
from core.services.invoice_service import InvoiceService
from core.validation import Invalid, validate_invoice_form
from utils.timezone import today_utc

logger = logging.getLogger(__name__)

CREATE_INVALID_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_INVALID_MESSAGE = "Missing Fields. Failed to Update Invoice."
CREATE_FAILED_MESSAGE = "Database Error: Failed to create invoice"
UPDATE_FAILED_MESSAGE = "Database Error: Failed to update invoice"
DELETE_FAILED_MESSAGE = "Database Error: Failed to delete invoice"
DELETE_SUCCEEDED_MESSAGE = "Invoice deleted successfully"

# Store-level failures: driver errors, and ValueError for a missing row
_STORE_ERRORS = (psycopg2.Error, ValueError)


class InvoiceActions:
    """Form-facing invoice mutations."""

    def __init__(self, invoices: InvoiceService, cache: ListingCache, config: DashboardConfig):
        self.invoices = invoices
        self.cache = cache
        self.config = config

    def create_invoice(self, form: Mapping[str, str | None]) -> ActionResult:
        """
        Create an invoice from a submitted form.

        Returns:
            ActionSucceeded pointing at the invoices listing, or ActionFailed
            carrying field errors or a database message.
        """
        result = validate_invoice_form(form)
        if isinstance(result, Invalid):
            return ActionFailed(
                FormActionState(errors=result.field_errors, message=CREATE_INVALID_MESSAGE)
            )

        data = result.data
        try:
            invoice = self.invoices.create(
                customer_id=data.customer_id,
                amount_cents=data.amount_cents,
                status=data.status,
                invoice_date=today_utc(),
            )
        except _STORE_ERRORS:
            logger.exception("Failed to create invoice")
            return ActionFailed(FormActionState(message=CREATE_FAILED_MESSAGE))

        logger.info(f"Created invoice {invoice.id}")
        self.cache.invalidate(self.config.invoices_path)
        return ActionSucceeded(redirect_to=self.config.invoices_path)

    def update_invoice(self, invoice_id: UUID, form: Mapping[str, str | None]) -> ActionResult:
        """
        Overwrite an invoice's customer, amount and status from a submitted form.

        Concurrent updates to the same invoice are last-write-wins.
        """
        result = validate_invoice_form(form)
        if isinstance(result, Invalid):
            return ActionFailed(
                FormActionState(errors=result.field_errors, message=UPDATE_INVALID_MESSAGE)
            )

        data = result.data
        try:
            self.invoices.update(
                invoice_id,
                customer_id=data.customer_id,
                amount_cents=data.amount_cents,
                status=data.status,
            )
        except _STORE_ERRORS:
            logger.exception(f"Failed to update invoice {invoice_id}")
            return ActionFailed(FormActionState(message=UPDATE_FAILED_MESSAGE))

        logger.info(f"Updated invoice {invoice_id}")
        self.cache.invalidate(self.config.invoices_path)
        return ActionSucceeded(redirect_to=self.config.invoices_path)

    def delete_invoice(self, invoice_id: UUID) -> DeleteResult:
        """
        Delete an invoice from within the listing view.

        No navigation follows; either outcome carries the message shown in place.
        A nonexistent id is reported the same way as a store failure.
        """
        try:
            deleted = self.invoices.delete(invoice_id)
        except _STORE_ERRORS:
            logger.exception(f"Failed to delete invoice {invoice_id}")
            return ActionFailed(FormActionState(message=DELETE_FAILED_MESSAGE))

        if not deleted:
            logger.warning(f"Delete requested for missing invoice {invoice_id}")
            return ActionFailed(FormActionState(message=DELETE_FAILED_MESSAGE))

        logger.info(f"Deleted invoice {invoice_id}")
        self.cache.invalidate(self.config.invoices_path)
        return ActionCompleted(FormActionState(message=DELETE_SUCCEEDED_MESSAGE))
