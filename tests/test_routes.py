"""
Unit tests for API routes
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from customer_crud.config import Settings
from customer_crud.context import ServiceContext
from customer_crud.main import create_app
from customer_crud.models.customer import Customer, TokenValidation
from customer_crud.utils.exceptions import (
    InternalError, InvalidInputError, InvalidPasswordError, NoSuchUserError, NotFoundError,
)

MANAGER = ("admin", "s3cret")
CREATED = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_customer(**overrides) -> Customer:
    fields = dict(id=1, name="Ann", phone="+1000", password="$2b$04$hash", active=True, created=CREATED)
    fields.update(overrides)
    return Customer(**fields)


@pytest.fixture
def context():
    """Mocked services"""
    security = MagicMock()
    security.authenticate_manager = AsyncMock(
        side_effect=lambda login, password: (login, password) == MANAGER
    )
    return ServiceContext(customers=MagicMock(), tokens=MagicMock(), security=security)


@pytest.fixture
def client(context):
    """Create test client"""
    app = create_app(Settings(bcrypt_rounds=4), context=context)
    with TestClient(app) as client:
        yield client


class TestManagerAuth:
    def test_missing_credentials(self, client, context):
        context.customers.get_all = AsyncMock(return_value=[])

        response = client.get("/customers")

        assert response.status_code == 400
        context.customers.get_all.assert_not_called()

    def test_invalid_credentials(self, client, context):
        context.customers.get_all = AsyncMock(return_value=[])

        response = client.get("/customers", auth=("admin", "wrong"))

        assert response.status_code == 401
        assert response.json()["error"] is True
        context.customers.get_all.assert_not_called()

    def test_token_routes_need_no_manager(self, client, context):
        context.tokens.validate_token = AsyncMock(return_value=TokenValidation(
            status_code="Not Found", status="fail", reason="notFound"
        ))

        response = client.post("/api/customers/token/validate", json={"token": "x"})

        assert response.status_code == 200
        context.security.authenticate_manager.assert_not_called()


class TestCustomerRoutes:
    def test_get_all(self, client, context):
        context.customers.get_all = AsyncMock(return_value=[make_customer(), make_customer(id=2, phone="+2000")])

        response = client.get("/customers", auth=MANAGER)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        data = response.json()
        assert [c["id"] for c in data] == [1, 2]
        assert "password" not in data[0]

    def test_get_all_internal_error(self, client, context):
        context.customers.get_all = AsyncMock(side_effect=InternalError())

        response = client.get("/customers", auth=MANAGER)

        assert response.status_code == 500
        assert response.json()["message"] == "Internal Server Error"

    def test_get_active(self, client, context):
        context.customers.get_all_active = AsyncMock(return_value=[make_customer()])
        context.customers.get_by_id = AsyncMock()

        response = client.get("/customers/active", auth=MANAGER)

        assert response.status_code == 200
        assert response.json()[0]["active"] is True
        context.customers.get_by_id.assert_not_called()

    def test_get_by_id(self, client, context):
        context.customers.get_by_id = AsyncMock(return_value=make_customer())

        response = client.get("/customers/1", auth=MANAGER)

        assert response.status_code == 200
        data = response.json()
        assert data == {
            "id": 1,
            "name": "Ann",
            "phone": "+1000",
            "active": True,
            "created": "2025-01-01T12:00:00Z",
        }
        context.customers.get_by_id.assert_awaited_once_with(1)

    def test_get_by_id_not_found(self, client, context):
        context.customers.get_by_id = AsyncMock(side_effect=NotFoundError())

        response = client.get("/customers/9", auth=MANAGER)

        assert response.status_code == 404

    def test_get_by_invalid_id(self, client, context):
        context.customers.get_by_id = AsyncMock()

        response = client.get("/customers/abc", auth=MANAGER)

        assert response.status_code == 400
        context.customers.get_by_id.assert_not_called()

    @pytest.mark.parametrize("method, path", [
        ("get", "/customers/1180591620717411303424"),
        ("delete", "/customers/9223372036854775808"),
        ("post", "/customers/block/-9223372036854775809"),
        ("post", "/customers/unblock/1180591620717411303424"),
    ])
    def test_id_outside_bigint_range(self, client, context, method, path):
        for name in ("get_by_id", "remove_by_id", "block_by_id", "unblock_by_id"):
            setattr(context.customers, name, AsyncMock())

        response = getattr(client, method)(path, auth=MANAGER)

        assert response.status_code == 400
        for name in ("get_by_id", "remove_by_id", "block_by_id", "unblock_by_id"):
            getattr(context.customers, name).assert_not_called()

    def test_largest_bigint_id_accepted(self, client, context):
        context.customers.get_by_id = AsyncMock(side_effect=NotFoundError())

        response = client.get("/customers/9223372036854775807", auth=MANAGER)

        assert response.status_code == 404
        context.customers.get_by_id.assert_awaited_once_with(9223372036854775807)

    def test_save_body_id_outside_bigint_range(self, client, context):
        context.customers.save = AsyncMock()

        response = client.post("/customers", auth=MANAGER, json={
            "id": 2**63, "name": "Ann", "phone": "+1000", "password": "secret"
        })

        assert response.status_code == 400
        context.customers.save.assert_not_called()

    def test_create(self, client, context):
        context.customers.save = AsyncMock(return_value=make_customer())

        response = client.post("/customers", auth=MANAGER, json={
            "id": 0, "name": "Ann", "phone": "+1000", "password": "secret"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["active"] is True
        assert "password" not in data
        saved = context.customers.save.call_args.args[0]
        assert saved.id == 0
        assert saved.password == "secret"

    def test_create_defaults_to_new_customer(self, client, context):
        context.customers.save = AsyncMock(return_value=make_customer())

        client.post("/customers", auth=MANAGER, json={
            "name": "Ann", "phone": "+1000", "password": "secret"
        })

        assert context.customers.save.call_args.args[0].id == 0

    def test_save_malformed_body(self, client, context):
        context.customers.save = AsyncMock()

        response = client.post("/customers", auth=MANAGER, content="{not json",
                               headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        context.customers.save.assert_not_called()

    def test_save_missing_password(self, client, context):
        context.customers.save = AsyncMock()

        response = client.post("/customers", auth=MANAGER, json={"id": 1, "name": "Ann", "phone": "+1000"})

        assert response.status_code == 400

    def test_save_duplicate_phone(self, client, context):
        context.customers.save = AsyncMock(side_effect=InvalidInputError("phone already registered"))

        response = client.post("/customers", auth=MANAGER, json={
            "name": "Ann", "phone": "+1000", "password": "secret"
        })

        assert response.status_code == 400
        assert response.json()["message"] == "phone already registered"

    def test_update_missing(self, client, context):
        context.customers.save = AsyncMock(side_effect=NotFoundError())

        response = client.post("/customers", auth=MANAGER, json={
            "id": 5, "name": "Ann", "phone": "+1000", "password": "secret"
        })

        assert response.status_code == 404

    def test_delete(self, client, context):
        context.customers.remove_by_id = AsyncMock(return_value=make_customer())

        response = client.delete("/customers/1", auth=MANAGER)

        assert response.status_code == 200
        assert response.json()["id"] == 1
        context.customers.remove_by_id.assert_awaited_once_with(1)

    def test_delete_missing(self, client, context):
        context.customers.remove_by_id = AsyncMock(side_effect=NotFoundError())

        response = client.delete("/customers/1", auth=MANAGER)

        assert response.status_code == 404

    def test_block(self, client, context):
        context.customers.block_by_id = AsyncMock(return_value=make_customer(active=False))

        response = client.post("/customers/block/1", auth=MANAGER)

        assert response.status_code == 200
        assert response.json()["active"] is False

    def test_unblock(self, client, context):
        context.customers.unblock_by_id = AsyncMock(return_value=make_customer(active=True))

        response = client.post("/customers/unblock/1", auth=MANAGER)

        assert response.status_code == 200
        assert response.json()["active"] is True

    def test_block_missing(self, client, context):
        context.customers.block_by_id = AsyncMock(side_effect=NotFoundError())

        response = client.post("/customers/block/1", auth=MANAGER)

        assert response.status_code == 404


class TestTokenRoutes:
    def test_issue_token(self, client, context):
        context.tokens.issue_token = AsyncMock(return_value="ab" * 256)

        response = client.post("/api/customers/token", json={"phone": "+1000", "password": "secret"})

        assert response.status_code == 200
        assert response.json() == {"token": "ab" * 256}
        context.tokens.issue_token.assert_awaited_once_with("+1000", "secret")

    def test_issue_token_no_such_user(self, client, context):
        context.tokens.issue_token = AsyncMock(side_effect=NoSuchUserError())

        response = client.post("/api/customers/token", json={"phone": "+1", "password": "secret"})

        assert response.status_code == 404

    def test_issue_token_invalid_password(self, client, context):
        context.tokens.issue_token = AsyncMock(side_effect=InvalidPasswordError())

        response = client.post("/api/customers/token", json={"phone": "+1000", "password": "x"})

        assert response.status_code == 401

    def test_issue_token_internal_error(self, client, context):
        context.tokens.issue_token = AsyncMock(side_effect=InternalError())

        response = client.post("/api/customers/token", json={"phone": "+1000", "password": "secret"})

        assert response.status_code == 500

    def test_validate_ok(self, client, context):
        context.tokens.validate_token = AsyncMock(return_value=TokenValidation(
            status_code="OK", status="ok", customer_id=3
        ))

        response = client.post("/api/customers/token/validate", json={"token": "abc"})

        assert response.status_code == 200
        assert response.json() == {"statusCode": "OK", "info": {"status": "ok", "customerId": 3}}

    def test_validate_expired(self, client, context):
        context.tokens.validate_token = AsyncMock(return_value=TokenValidation(
            status_code="Bad Request", status="fail", reason="expired"
        ))

        response = client.post("/api/customers/token/validate", json={"token": "abc"})

        assert response.status_code == 200
        assert response.json() == {"statusCode": "Bad Request", "info": {"status": "fail", "reason": "expired"}}


class TestServiceRoutes:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "customer-service"

    def test_database_health_without_pool(self, client):
        response = client.get("/health/database")

        assert response.status_code == 200
        assert response.json()["database"] == "not_initialized"

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
