"""Tests for PostgresClient - pooled psycopg2 access with bound parameters."""

from unittest.mock import MagicMock
from uuid import uuid4

import psycopg2
import pytest

from clients.postgres_client import PostgresClient

DSN = "postgresql://dashboard@localhost/dashboard_test"


@pytest.fixture
def pool(monkeypatch):
    """Replace the psycopg2 pool with a mock handing out one mock connection."""
    conn = MagicMock()
    conn.closed = False
    cursor = conn.cursor.return_value.__enter__.return_value

    pool = MagicMock()
    pool.getconn.return_value = conn
    pool.conn = conn
    pool.cursor = cursor

    factory = MagicMock(return_value=pool)
    monkeypatch.setattr(psycopg2.pool, "ThreadedConnectionPool", factory)
    pool.factory = factory

    yield pool
    PostgresClient.close_all_pools()


@pytest.fixture
def client(pool):
    return PostgresClient(DSN)


class TestPoolManagement:

    def test_pool_shared_per_url(self, pool):
        PostgresClient(DSN)
        PostgresClient(DSN)

        assert pool.factory.call_count == 1

    def test_pool_sizes_forwarded(self, pool):
        PostgresClient(DSN, min_connections=1, max_connections=5)

        kwargs = pool.factory.call_args.kwargs
        assert (kwargs["minconn"], kwargs["maxconn"], kwargs["dsn"]) == (1, 5, DSN)

    def test_close_drops_pool(self, client, pool):
        client.close()

        pool.closeall.assert_called_once()
        assert DSN not in PostgresClient._pools


class TestExecute:

    def test_returns_row_dicts(self, client, pool):
        pool.cursor.description = [("id",), ("name",)]
        pool.cursor.fetchall.return_value = [{"id": 1, "name": "Amy Burns"}]

        assert client.execute("SELECT id, name FROM customers") == [{"id": 1, "name": "Amy Burns"}]
        pool.conn.commit.assert_called_once()

    def test_statement_without_result_returns_empty_list(self, client, pool):
        pool.cursor.description = None

        assert client.execute("DELETE FROM invoices") == []

    def test_execute_single_none_when_empty(self, client, pool):
        pool.cursor.description = [("id",)]
        pool.cursor.fetchall.return_value = []

        assert client.execute_single("SELECT id FROM invoices WHERE false") is None

    def test_execute_scalar(self, client, pool):
        pool.cursor.fetchone.return_value = (13,)

        assert client.execute_scalar("SELECT COUNT(*) FROM invoices") == 13

    def test_execute_scalar_none_when_empty(self, client, pool):
        pool.cursor.fetchone.return_value = None

        assert client.execute_scalar("SELECT 1 WHERE false") is None

    def test_execute_returning(self, client, pool):
        invoice_id = uuid4()
        pool.cursor.fetchall.return_value = [{"id": invoice_id}]

        rows = client.execute_returning("DELETE FROM invoices WHERE id = %s RETURNING id", (invoice_id,))

        assert rows == [{"id": invoice_id}]


class TestParameters:

    def test_uuids_sent_as_strings(self, client, pool):
        invoice_id = uuid4()
        pool.cursor.description = None

        client.execute("UPDATE invoices SET status = %s WHERE id = %s", ("paid", invoice_id))

        pool.cursor.execute.assert_called_once_with(
            "UPDATE invoices SET status = %s WHERE id = %s", ("paid", str(invoice_id))
        )

    def test_named_parameters_converted(self, client, pool):
        customer_id = uuid4()
        pool.cursor.description = None

        client.execute("SELECT 1", {"customer": customer_id, "ids": [customer_id]})

        params = pool.cursor.execute.call_args.args[1]
        assert params == {"customer": str(customer_id), "ids": [str(customer_id)]}


class TestFailureHandling:

    def test_rolls_back_and_returns_connection(self, client, pool):
        pool.cursor.execute.side_effect = psycopg2.IntegrityError("duplicate key")

        with pytest.raises(psycopg2.Error):
            client.execute("INSERT INTO invoices VALUES (%s)", (1,))

        pool.conn.rollback.assert_called_once()
        pool.conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(pool.conn)

    def test_empty_pool_raises(self, client, pool):
        pool.getconn.return_value = None

        with pytest.raises(RuntimeError, match="Could not get connection"):
            client.execute("SELECT 1")
