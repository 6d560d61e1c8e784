"""
Invoice service for persistence and listing reads.

Each write is a single statement against the invoices table; amounts arrive
here already converted to cents. Listing reads go through the ListingCache
under the invoices path, so they are only as fresh as the last invalidation.
"""

import logging
import math
from datetime import date
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.cache import ListingCache
from core.config import DashboardConfig
from core.models import Invoice, InvoiceForEdit, InvoiceStatus, InvoiceTableRow

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, postgres: PostgresClient, cache: ListingCache, config: DashboardConfig):
        self.postgres = postgres
        self.cache = cache
        self.config = config

    def create(
        self,
        customer_id: str,
        amount_cents: int,
        status: InvoiceStatus,
        invoice_date: date,
    ) -> Invoice:
        """
        Insert a new invoice. The store assigns the id.

        Returns:
            Created invoice
        """
        row = self.postgres.execute_returning(
            """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s)
            RETURNING id, customer_id, amount, status, date
            """,
            (customer_id, amount_cents, status.value, invoice_date)
        )[0]

        return Invoice.model_validate(row)

    def update(
        self,
        invoice_id: UUID,
        customer_id: str,
        amount_cents: int,
        status: InvoiceStatus,
    ) -> Invoice:
        """
        Overwrite customer, amount and status. id and date are never written.

        Raises:
            ValueError: If invoice not found
        """
        rows = self.postgres.execute_returning(
            """
            UPDATE invoices
            SET customer_id = %s, amount = %s, status = %s
            WHERE id = %s
            RETURNING id, customer_id, amount, status, date
            """,
            (customer_id, amount_cents, status.value, invoice_id)
        )

        if not rows:
            raise ValueError(f"Invoice {invoice_id} not found")

        return Invoice.model_validate(rows[0])

    def delete(self, invoice_id: UUID) -> bool:
        """
        Hard-delete an invoice.

        Returns:
            True if a row was removed, False if no invoice had that id.
        """
        rows = self.postgres.execute_returning(
            "DELETE FROM invoices WHERE id = %s RETURNING id",
            (invoice_id,)
        )
        return len(rows) > 0

    def get_by_id(self, invoice_id: UUID) -> Invoice | None:
        """Get invoice by ID, None if it doesn't exist."""
        row = self.postgres.execute_single(
            "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = %s",
            (invoice_id,)
        )

        if row is None:
            return None

        return Invoice.model_validate(row)

    def fetch_for_edit(self, invoice_id: UUID) -> InvoiceForEdit | None:
        """Get invoice with its amount converted back to dollars for the edit form."""
        invoice = self.get_by_id(invoice_id)
        if invoice is None:
            return None

        return InvoiceForEdit(
            id=invoice.id,
            customer_id=invoice.customer_id,
            amount=invoice.amount_dollars,
            status=invoice.status,
        )

    def fetch_filtered(self, query: str, page: int) -> list[InvoiceTableRow]:
        """
        One listing page of invoices matching query, newest first.

        The query matches customer name or email, the amount, the date or
        the status, case-insensitively. An empty query matches everything.
        """
        page = max(page, 1)
        limit = self.config.items_per_page
        offset = (page - 1) * limit

        def load() -> list[dict]:
            rows = self.postgres.execute(
                """
                SELECT
                    invoices.id, invoices.customer_id, invoices.amount,
                    invoices.date, invoices.status,
                    customers.name, customers.email, customers.image_url
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                WHERE
                    customers.name ILIKE %(pattern)s OR
                    customers.email ILIKE %(pattern)s OR
                    invoices.amount::text ILIKE %(pattern)s OR
                    invoices.date::text ILIKE %(pattern)s OR
                    invoices.status ILIKE %(pattern)s
                ORDER BY invoices.date DESC
                LIMIT %(limit)s OFFSET %(offset)s
                """,
                {"pattern": f"%{query}%", "limit": limit, "offset": offset}
            )
            return [InvoiceTableRow.model_validate(row).model_dump(mode="json") for row in rows]

        cached = self.cache.get_or_load(
            self.config.invoices_path, f"filtered:{page}:{query}", load
        )
        return [InvoiceTableRow.model_validate(row) for row in cached]

    def fetch_pages(self, query: str) -> int:
        """Total listing pages for query (0 when nothing matches)."""

        def load() -> dict:
            count = self.postgres.execute_scalar(
                """
                SELECT COUNT(*)
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                WHERE
                    customers.name ILIKE %(pattern)s OR
                    customers.email ILIKE %(pattern)s OR
                    invoices.amount::text ILIKE %(pattern)s OR
                    invoices.date::text ILIKE %(pattern)s OR
                    invoices.status ILIKE %(pattern)s
                """,
                {"pattern": f"%{query}%"}
            )
            return {"count": int(count or 0)}

        cached = self.cache.get_or_load(self.config.invoices_path, f"count:{query}", load)
        return math.ceil(cached["count"] / self.config.items_per_page)
