"""Tests for GET /api/* read endpoints."""

from uuid import uuid4


class TestAuthentication:

    def test_unauthenticated_returns_401(self, unauthed_client):
        response = unauthed_client.get("/api/invoices")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"


class TestListInvoices:

    def test_defaults_to_first_page(self, client, db, invoice_table_row):
        db.execute.return_value = [invoice_table_row()]
        db.execute_scalar.return_value = 1

        body = client.get("/api/invoices").json()

        assert body["success"] is True
        assert body["data"]["query"] == ""
        assert body["data"]["page"] == 1
        assert body["data"]["total_pages"] == 1
        assert body["data"]["invoices"][0]["name"] == "Lee Robinson"

    def test_query_and_page_from_url(self, client, db):
        db.execute_scalar.return_value = 13

        body = client.get("/api/invoices?query=lee&page=3").json()

        assert body["data"]["query"] == "lee"
        assert body["data"]["page"] == 3
        assert body["data"]["total_pages"] == 3
        assert db.execute.call_args.args[1] == {"pattern": "%lee%", "limit": 6, "offset": 12}

    def test_bad_page_reads_as_first(self, client):
        body = client.get("/api/invoices?page=abc").json()

        assert body["data"]["page"] == 1


class TestGetInvoice:

    def test_returns_invoice_and_customers(self, client, db, invoice_row, test_invoice_id, test_customer_id):
        db.execute_single.return_value = invoice_row(amount=15795)
        db.execute.return_value = [{"id": test_customer_id, "name": "Lee Robinson"}]

        body = client.get(f"/api/invoices/{test_invoice_id}").json()

        assert body["data"]["invoice"]["amount"] == 157.95
        assert body["data"]["customers"] == [{"id": str(test_customer_id), "name": "Lee Robinson"}]

    def test_missing_invoice_404(self, client):
        response = client.get(f"/api/invoices/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_malformed_id_422(self, client):
        response = client.get("/api/invoices/not-a-uuid")

        assert response.status_code == 422


class TestCustomers:

    def test_lists_fields_without_query(self, client, db, test_customer_id):
        db.execute.return_value = [{"id": test_customer_id, "name": "Amy Burns"}]

        body = client.get("/api/customers").json()

        assert body["data"] == [{"id": str(test_customer_id), "name": "Amy Burns"}]

    def test_searches_with_query(self, client, db):
        client.get("/api/customers?query=amy")

        assert db.execute.call_args.args[1]["pattern"] == "%amy%"


class TestSearchLocation:

    def test_resets_page_and_sets_query(self, client):
        body = client.get(
            "/api/search-location",
            params={"pathname": "/dashboard/invoices", "term": "lee", "current": "page=4"},
        ).json()

        assert body["data"] == {"location": "/dashboard/invoices?page=1&query=lee", "replace": True}

    def test_empty_term_drops_query(self, client):
        body = client.get(
            "/api/search-location",
            params={"pathname": "/dashboard/invoices", "term": "", "current": "query=lee&page=2"},
        ).json()

        assert body["data"]["location"] == "/dashboard/invoices?page=1"


class TestNavigation:

    def test_marks_active_link(self, client):
        body = client.get("/api/navigation?pathname=/dashboard/invoices").json()

        active = [link["name"] for link in body["data"] if link["active"]]
        assert active == ["Invoices"]


class TestBackendFailures:

    def test_database_down_is_503(self, client, db):
        import psycopg2

        db.execute.side_effect = psycopg2.OperationalError("connection refused")

        response = client.get("/api/invoices")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
