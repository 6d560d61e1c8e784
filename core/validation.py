"""
Invoice form validation.

Turns the raw string mapping of a submitted form into either normalized,
typed input or the per-field messages to show next to each input. Every
field is checked on its own, so one submission reports all of its problems
at once. No I/O apart from debug logging.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from pydantic import ValidationError

from core.models.invoice import InvoiceForm, InvoiceInput

logger = logging.getLogger(__name__)

# Form inputs read from a submission; anything else (id, date, csrf...) is ignored
FORM_FIELDS = ("customerId", "amount", "status")


@dataclass(frozen=True)
class Valid:
    """Submission passed every rule."""

    data: InvoiceInput


@dataclass(frozen=True)
class Invalid:
    """Submission failed one or more rules. Keys are form field names."""

    field_errors: dict[str, list[str]]


ValidationResult = Valid | Invalid


def validate_invoice_form(raw: Mapping[str, str | None]) -> ValidationResult:
    """
    Validate a create/update invoice submission.

    Args:
        raw: Form field name -> submitted value. Missing keys are treated the
             same as an absent form input.

    Returns:
        Valid with normalized input, or Invalid with the messages per field.
    """
    submitted = {name: raw.get(name) for name in FORM_FIELDS}

    try:
        form = InvoiceForm.model_validate(submitted)
    except ValidationError as exc:
        field_errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            field_errors.setdefault(field, []).append(error["msg"])
        logger.debug(f"Invoice form rejected: {sorted(field_errors)}")
        return Invalid(field_errors=field_errors)

    return Valid(
        data=InvoiceInput(
            customer_id=form.customer_id,
            amount=form.amount,
            status=form.status,
        )
    )
