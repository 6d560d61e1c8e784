"""
Invoice dashboard API: FastAPI application factory.

Run with:
    uvicorn main:create_app --factory

Clients and services are built eagerly in create_app so routers can be
wired with them; tests pass their own doubles instead.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth import (
    AuthConfig,
    AuthDatabase,
    AuthMiddleware,
    AuthService,
    CredentialsProvider,
    RateLimiter,
    SessionManager,
    create_auth_router,
)
from clients import PostgresClient, ValkeyClient, get_database_url, get_valkey_url
from core.cache import ListingCache
from core.config import DashboardConfig
from core.services.customer_service import CustomerService
from core.services.invoice_actions import InvoiceActions
from core.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once per process."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def build_services(
    postgres: PostgresClient,
    valkey: ValkeyClient,
    dashboard_config: DashboardConfig,
    auth_config: AuthConfig,
) -> dict:
    """Wire every service from its clients and config."""
    cache = ListingCache(valkey, ttl_seconds=dashboard_config.listing_cache_ttl_seconds)
    invoice_service = InvoiceService(postgres, cache, dashboard_config)
    session_manager = SessionManager(valkey, auth_config)
    provider = CredentialsProvider(
        AuthDatabase(postgres),
        session_manager,
        RateLimiter(valkey, auth_config),
    )

    return {
        "invoice": invoice_service,
        "customer": CustomerService(postgres),
        "invoice_actions": InvoiceActions(invoice_service, cache, dashboard_config),
        "session_manager": session_manager,
        "auth": AuthService(provider, session_manager),
    }


def create_app(
    postgres: PostgresClient | None = None,
    valkey: ValkeyClient | None = None,
    dashboard_config: DashboardConfig | None = None,
    auth_config: AuthConfig | None = None,
) -> FastAPI:
    """Build the dashboard API. Missing clients are created from Vault secrets."""
    if postgres is None or valkey is None:
        # VAULT_* settings may come from a local .env
        load_dotenv()
    postgres = postgres or PostgresClient(get_database_url())
    valkey = valkey or ValkeyClient(get_valkey_url())
    dashboard_config = dashboard_config or DashboardConfig()
    auth_config = auth_config or AuthConfig()

    services = build_services(postgres, valkey, dashboard_config, auth_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(os.getenv("LOG_LEVEL", "INFO"))
        logger.info("Invoice dashboard API started")
        yield
        logger.info("Invoice dashboard API shutting down")
        postgres.close()
        valkey.close()

    app = FastAPI(title="Invoice Dashboard API", lifespan=lifespan)
    app.add_middleware(
        AuthMiddleware,
        session_manager=services["session_manager"],
        cookie_name=auth_config.session_cookie_name,
    )
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(create_auth_router(services["auth"], auth_config), prefix="/auth")
    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services["invoice_actions"]), prefix="/api")

    return app
