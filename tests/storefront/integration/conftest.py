import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import (
    category_router,
    customer_router,
    order_router,
    product_router,
    register_error_handlers,
)


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(customer_router)
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


def _identity(user_id, role=None, email=None, name=None):
    headers = {
        "X-User-Id": user_id,
        "X-User-Email": email or f"{user_id}@example.com",
        "X-User-Name": name or user_id.title(),
    }
    if role:
        headers["X-User-Role"] = role
    return headers


@pytest.fixture()
def identity():
    """Builds the headers the gateway forwards for a verified user."""
    return _identity


@pytest.fixture()
def shopper():
    return _identity("shopper")


@pytest.fixture()
def admin_headers():
    return _identity("admin", role="admin")


@pytest.fixture()
def stocked_product(client, admin_headers):
    """Create a product through the API and return its id."""

    def _create(**overrides):
        body = {
            "name": "Basmati Rice",
            "description": "Aged long-grain rice",
            "original_price": 70.0,
            "discounted_price": 50.0,
            "category": "Grains",
            "stock": 10,
        }
        body.update(overrides)
        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 201
        return response.json()["product_id"]

    return _create
