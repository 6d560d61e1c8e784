"""Shared test fixtures for the invoice dashboard test suite."""

from pathlib import Path
from unittest.mock import Mock
from uuid import UUID

import fakeredis
import pytest
import redis
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env")

import clients.vault_client as vault_module
vault_module._vault_client_instance = None
vault_module._secret_cache.clear()

from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.cache import ListingCache
from core.config import DashboardConfig


# =============================================================================
# TEST CONSTANTS
# =============================================================================

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
TEST_CUSTOMER_ID = UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a")
TEST_INVOICE_ID = UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9")

INVOICES_PATH = "/dashboard/invoices"


def _invoice_row(**overrides) -> dict:
    """A row as the invoices table returns it."""
    from datetime import date

    row = {
        "id": TEST_INVOICE_ID,
        "customer_id": TEST_CUSTOMER_ID,
        "amount": 1000,
        "status": "pending",
        "date": date(2024, 3, 14),
    }
    row.update(overrides)
    return row


def _invoice_table_row(**overrides) -> dict:
    """A row of the invoices listing (invoice joined with customer)."""
    row = _invoice_row()
    row.update({
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    })
    row.update(overrides)
    return row


@pytest.fixture
def invoice_row():
    """Factory for invoices table rows."""
    return _invoice_row


@pytest.fixture
def invoice_table_row():
    """Factory for invoices listing rows."""
    return _invoice_table_row


# =============================================================================
# IDENTITY FIXTURES
# =============================================================================


@pytest.fixture
def test_user_id() -> UUID:
    return TEST_USER_ID


@pytest.fixture
def test_customer_id() -> UUID:
    return TEST_CUSTOMER_ID


@pytest.fixture
def test_invoice_id() -> UUID:
    return TEST_INVOICE_ID


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def valkey(monkeypatch):
    """ValkeyClient backed by an in-process fake server."""
    server = fakeredis.FakeServer()
    monkeypatch.setattr(
        redis,
        "from_url",
        lambda url, **kwargs: fakeredis.FakeRedis(server=server, **kwargs),
    )
    client = ValkeyClient("redis://fake:6379/0")
    yield client
    client.close()


@pytest.fixture
def db():
    """PostgresClient double. Tests script its return values per call."""
    mock = Mock(spec=PostgresClient)
    mock.execute.return_value = []
    mock.execute_single.return_value = None
    mock.execute_scalar.return_value = 0
    mock.execute_returning.return_value = []
    return mock


# =============================================================================
# CORE FIXTURES
# =============================================================================


@pytest.fixture
def dashboard_config() -> DashboardConfig:
    return DashboardConfig(invoices_path=INVOICES_PATH, items_per_page=6)


@pytest.fixture
def cache(valkey, dashboard_config) -> ListingCache:
    return ListingCache(valkey, ttl_seconds=dashboard_config.listing_cache_ttl_seconds)


@pytest.fixture
def invoice_service(db, cache, dashboard_config):
    from core.services.invoice_service import InvoiceService

    return InvoiceService(db, cache, dashboard_config)


@pytest.fixture
def customer_service(db):
    from core.services.customer_service import CustomerService

    return CustomerService(db)


@pytest.fixture
def invoice_actions(invoice_service, cache, dashboard_config):
    from core.services.invoice_actions import InvoiceActions

    return InvoiceActions(invoice_service, cache, dashboard_config)
