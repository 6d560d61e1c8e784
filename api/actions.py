"""POST /api/invoices* form-driven invoice mutations."""

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.base import ErrorCodes, error_json, success_response
from core.models import ActionFailed, ActionSucceeded, FormActionState


async def _read_form(request: Request) -> dict[str, str]:
    """Submitted form as field name -> string. File parts are ignored."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _form_state_response(state: FormActionState) -> JSONResponse:
    code = ErrorCodes.VALIDATION_ERROR if state.errors else ErrorCodes.MUTATION_FAILED
    return error_json(400, code, state.message or "", data=state.model_dump(mode="json"))


def create_actions_router(actions) -> APIRouter:
    router = APIRouter()

    @router.post("/invoices")
    async def create_invoice(request: Request):
        result = actions.create_invoice(await _read_form(request))
        if isinstance(result, ActionSucceeded):
            return RedirectResponse(url=result.redirect_to, status_code=303)
        return _form_state_response(result.state)

    @router.post("/invoices/{invoice_id}")
    async def update_invoice(invoice_id: UUID, request: Request):
        result = actions.update_invoice(invoice_id, await _read_form(request))
        if isinstance(result, ActionSucceeded):
            return RedirectResponse(url=result.redirect_to, status_code=303)
        return _form_state_response(result.state)

    @router.post("/invoices/{invoice_id}/delete")
    async def delete_invoice(invoice_id: UUID):
        result = actions.delete_invoice(invoice_id)
        if isinstance(result, ActionFailed):
            return _form_state_response(result.state)
        return success_response(result.state.model_dump(mode="json")).model_dump(mode="json")

    return router
