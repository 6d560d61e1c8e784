"""Outcomes threaded between a form submission and the next render."""

from dataclasses import dataclass, field

from pydantic import BaseModel


class FormActionState(BaseModel):
    """
    What a failed submission reports back into the still-mounted form.

    errors maps form field name to its ordered messages; a field absent from
    errors is individually valid.
    """

    errors: dict[str, list[str]] | None = None
    message: str | None = None


@dataclass(frozen=True)
class ActionSucceeded:
    """Mutation persisted. The caller navigates to redirect_to."""

    redirect_to: str


@dataclass(frozen=True)
class ActionFailed:
    """Mutation rejected or not persisted. Nothing changed in the store."""

    state: FormActionState = field(default_factory=FormActionState)


@dataclass(frozen=True)
class ActionCompleted:
    """Mutation persisted with no navigation; state.message is shown in place."""

    state: FormActionState = field(default_factory=FormActionState)


ActionResult = ActionSucceeded | ActionFailed
DeleteResult = ActionCompleted | ActionFailed
