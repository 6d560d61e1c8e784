"""Invoice domain models.

All amounts are stored in cents (integer) to avoid floating point issues.
$10.00 = 1000 cents. Forms submit dollars; an amount is only accepted when
its rounded cents value is positive and fits the store's integer column.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


class InvoiceStatus(str, Enum):
    """Invoice payment status."""

    PENDING = "pending"
    PAID = "paid"


CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_INVALID_MESSAGE = "Please enter an amount greater than $0."
STATUS_INVALID_MESSAGE = "Please select an invoice status."

# invoices.amount is a PostgreSQL integer
MAX_AMOUNT_CENTS = 2**31 - 1


def to_cents(amount: Decimal) -> int | None:
    """
    Dollars to whole cents, rounded half-up. 19.99 -> 1999.

    None when the result would not be a storable positive amount.
    """
    # Bound the magnitude first so scaling by 100 cannot overflow the context
    if not amount.is_finite() or amount <= 0 or amount.adjusted() > 12:
        return None
    cents = int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))
    if cents <= 0 or cents > MAX_AMOUNT_CENTS:
        return None
    return cents


class InvoiceForm(BaseModel):
    """
    Shape of a create/update invoice submission.

    Field names match the form inputs (customerId, amount, status). The
    system-owned id and date are not part of this shape. Each field carries a
    single user-facing message regardless of why its raw value was rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED_MESSAGE)
        return value.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_positive_amount(cls, value: Any) -> Decimal:
        try:
            amount = Decimal(str(value).strip()) if value is not None else None
        except InvalidOperation:
            amount = None
        if amount is None or to_cents(amount) is None:
            raise PydanticCustomError("amount_invalid", AMOUNT_INVALID_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_known_status(cls, value: Any) -> InvoiceStatus:
        try:
            return InvoiceStatus(value)
        except ValueError:
            raise PydanticCustomError("status_invalid", STATUS_INVALID_MESSAGE)


class InvoiceInput(BaseModel):
    """Validated, normalized invoice input (dollars, not yet cents)."""

    customer_id: str
    amount: Decimal = Field(..., gt=0)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def storable_amount(cls, value: Decimal) -> Decimal:
        if to_cents(value) is None:
            raise PydanticCustomError("amount_invalid", AMOUNT_INVALID_MESSAGE)
        return value

    @property
    def amount_cents(self) -> int:
        """Amount in cents, rounded half-up. 19.99 -> 1999."""
        return to_cents(self.amount)


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: UUID
    customer_id: UUID
    amount: int
    status: InvoiceStatus
    date: date

    model_config = {"from_attributes": True}

    @property
    def amount_dollars(self) -> float:
        """Amount in dollars for display and edit forms."""
        return self.amount / 100

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID


class InvoiceForEdit(BaseModel):
    """Invoice as prefilled into the edit form (amount in dollars)."""

    id: UUID
    customer_id: UUID
    amount: float
    status: InvoiceStatus


class InvoiceTableRow(BaseModel):
    """One row of the invoices listing, joined with its customer."""

    id: UUID
    customer_id: UUID
    name: str
    email: str
    image_url: str | None = None
    date: date
    amount: int
    status: InvoiceStatus

    model_config = {"from_attributes": True}
