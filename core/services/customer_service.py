"""
Customer service (read-only).

Customers are managed outside the dashboard; this service only feeds the
invoice form's customer select and the customers listing.
"""

import logging
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.models import Customer, CustomerField

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer reads."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def list_fields(self) -> list[CustomerField]:
        """All customers as id/name pairs, ordered by name."""
        rows = self.postgres.execute(
            "SELECT id, name FROM customers ORDER BY name ASC"
        )
        return [CustomerField.model_validate(row) for row in rows]

    def get_by_id(self, customer_id: UUID) -> Customer | None:
        """Get customer by ID."""
        row = self.postgres.execute_single(
            "SELECT id, name, email, image_url FROM customers WHERE id = %s",
            (customer_id,)
        )

        if row is None:
            return None

        return Customer.model_validate(row)

    def search(self, query: str, limit: int = 50) -> list[Customer]:
        """
        Search customers by name or email (case-insensitive).

        Args:
            query: Substring to match; empty matches everyone
            limit: Maximum results

        Returns:
            Matching customers ordered by name
        """
        rows = self.postgres.execute(
            """
            SELECT id, name, email, image_url
            FROM customers
            WHERE name ILIKE %(pattern)s OR email ILIKE %(pattern)s
            ORDER BY name ASC
            LIMIT %(limit)s
            """,
            {"pattern": f"%{query}%", "limit": limit}
        )
        return [Customer.model_validate(row) for row in rows]
