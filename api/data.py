"""GET /api/* read endpoints for the invoices dashboard."""

from uuid import UUID

from fastapi import APIRouter, Query, Request

from api.base import success_response
from core.navigation import nav_links_for
from core.search import SearchState, next_search_location


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoice"]
    customer_svc = services["customer"]

    @router.get("/invoices")
    async def list_invoices(request: Request):
        """One page of the invoices listing plus the page count for the same query."""
        state = SearchState.from_query_string(request.url.query)
        invoices = invoice_svc.fetch_filtered(state.query, state.page)
        total_pages = invoice_svc.fetch_pages(state.query)
        return success_response({
            "query": state.query,
            "page": state.page,
            "total_pages": total_pages,
            "invoices": [i.model_dump(mode="json") for i in invoices],
        }).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}")
    async def get_invoice(invoice_id: UUID):
        """Invoice prefilled for the edit form, with the customer options."""
        invoice = invoice_svc.fetch_for_edit(invoice_id)
        if invoice is None:
            raise ValueError(f"Invoice {invoice_id} not found")

        customers = customer_svc.list_fields()
        return success_response({
            "invoice": invoice.model_dump(mode="json"),
            "customers": [c.model_dump(mode="json") for c in customers],
        }).model_dump(mode="json")

    @router.get("/customers")
    async def list_customers(query: str = Query("")):
        if query:
            customers = customer_svc.search(query)
        else:
            customers = customer_svc.list_fields()
        return success_response(
            [c.model_dump(mode="json") for c in customers]
        ).model_dump(mode="json")

    @router.get("/search-location")
    async def search_location(
        pathname: str = Query(...),
        term: str = Query(""),
        current: str = Query("", description="Current query string, without '?'"),
    ):
        """Where the search box should replace the location to after `term`."""
        return success_response({
            "location": next_search_location(pathname, current, term),
            "replace": True,
        }).model_dump(mode="json")

    @router.get("/navigation")
    async def navigation(pathname: str = Query("/dashboard")):
        return success_response(nav_links_for(pathname)).model_dump(mode="json")

    return router
