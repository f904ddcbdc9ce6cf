"""Every failure leaves the API as {statusCode, message, error}."""
import sqlite3

import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from refdata.api.v1.error_handlers import GENERIC_SERVER_MESSAGE, KIND_TO_STATUS
from refdata.exceptions import ErrorKind


async def seed_country(client, iso="US"):
    currency = await client.post("/currencies", json={"name": "US Dollar", "code": "USD", "symbol": "$"})
    country = await client.post(
        "/countries", json={"currencyId": currency.json()["id"], "name": "United States", "iso": iso, "flag": "x"}
    )
    return currency.json()["id"], country.json()["id"]


def test_every_kind_has_a_status():
    assert set(KIND_TO_STATUS) == set(ErrorKind)
    assert KIND_TO_STATUS[ErrorKind.UNIQUE_VIOLATION] == 409
    assert KIND_TO_STATUS[ErrorKind.CHECK_VIOLATION] == 400
    assert KIND_TO_STATUS[ErrorKind.UNKNOWN] == 500


@pytest.mark.asyncio
class TestRepositoryErrors:

    async def test_duplicate_is_409(self, client):
        currency_id, _ = await seed_country(client, iso="US")

        response = await client.post(
            "/countries", json={"currencyId": currency_id, "name": "Again", "iso": "us", "flag": "x"}
        )

        assert response.status_code == 409
        assert response.json() == {
            "statusCode": 409,
            "message": "Duplicate record violates unique constraint",
            "error": "Conflict",
        }

    async def test_duplicate_does_not_poison_later_requests(self, client):
        currency_id, _ = await seed_country(client, iso="US")
        await client.post("/countries", json={"currencyId": currency_id, "name": "Again", "iso": "US", "flag": "x"})

        response = await client.post(
            "/countries", json={"currencyId": currency_id, "name": "Canada", "iso": "CA", "flag": "x"}
        )

        assert response.status_code == 201

    async def test_missing_entity_is_404(self, client):
        response = await client.get("/countries/999")

        assert response.status_code == 404
        assert response.json() == {
            "statusCode": 404,
            "message": 'Country with {"id":999} not found',
            "error": "Not Found",
        }

    async def test_invalid_id_is_400(self, client):
        response = await client.get("/countries/abc")

        assert response.status_code == 400
        assert response.json() == {
            "statusCode": 400,
            "message": "A valid Country ID is required",
            "error": "Bad Request",
        }

    async def test_foreign_key_violation_is_400(self, client):
        response = await client.post("/cities", json={"countryId": 999, "name": "Nowhere"})

        assert response.status_code == 400
        assert response.json()["message"] == "Foreign key constraint violation"

    async def test_storage_fault_is_500_without_driver_text(self, client, async_engine):
        def _fail(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith("SELECT"):
                raise sqlite3.OperationalError("disk I/O error at /var/lib/secret.db")

        event.listen(async_engine.sync_engine, "before_cursor_execute", _fail)
        try:
            response = await client.get("/countries")
        finally:
            event.remove(async_engine.sync_engine, "before_cursor_execute", _fail)

        assert response.status_code == 500
        assert response.json() == {
            "statusCode": 500,
            "message": GENERIC_SERVER_MESSAGE,
            "error": "Internal Server Error",
        }
        assert "secret" not in response.text


@pytest.mark.asyncio
class TestFrameworkErrors:

    async def test_body_validation_is_400(self, client):
        response = await client.post("/countries", json={"currencyId": 1, "name": "X", "iso": "TOOLONG", "flag": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bad Request"
        assert "iso" in body["message"]
        assert "name" in body["message"]

    async def test_unknown_route_keeps_the_shape(self, client):
        response = await client.get("/planets")

        assert response.status_code == 404
        assert response.json() == {"statusCode": 404, "message": "Not Found", "error": "Not Found"}

    async def test_unhandled_integrity_error_is_still_classified(self, app, client):
        @app.get("/boom/duplicate")
        async def boom_duplicate():
            raise IntegrityError("INSERT ...", {}, sqlite3.IntegrityError("UNIQUE constraint failed: countries.iso"))

        response = await client.get("/boom/duplicate")

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    async def test_unhandled_error_is_generic_500(self, app, client):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("internal detail that must not leak")

        response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "statusCode": 500,
            "message": GENERIC_SERVER_MESSAGE,
            "error": "Internal Server Error",
        }
