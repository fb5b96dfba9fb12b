import json
import logging
import os
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

STRAPI_URL = "https://cms.example.test"

# Set test environment variables
os.environ.update(
    {
        "STRIPE_API_KEY": "sk_test_123",
        "STRIPE_WEBHOOK_SECRET": "whsec_test",
        "STRAPI_API_URL": f"{STRAPI_URL}/",
        "STRAPI_TOKEN": "strapi_test_token",
        "LOG_LEVEL": "DEBUG",
    }
)

# Import app modules after setting environment variables
from inventory_hook.core.config import get_settings
from inventory_hook.main import app, get_processor
from inventory_hook.services.inventory import InventoryUpdater
from inventory_hook.services.line_items import StripeLineItemSource
from inventory_hook.services.strapi import StrapiClient
from inventory_hook.services.webhook_processor import WebhookProcessor
from inventory_hook.signing import sign_payload

logger = logging.getLogger(__name__)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def catalog():
    client = StrapiClient(STRAPI_URL, "strapi_test_token")
    yield client
    client.close()


@pytest.fixture
def line_items():
    source = MagicMock(spec=StripeLineItemSource)
    source.list_line_items.return_value = []
    return source


@pytest.fixture
def processor(catalog, line_items):
    return WebhookProcessor(updater=InventoryUpdater(catalog), line_items=line_items)


@pytest.fixture
def client(processor):
    app.dependency_overrides[get_processor] = lambda: processor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def deliver(client, settings):
    """POST a payload to /webhook with a valid signature."""

    def _deliver(payload: dict, secret: str | None = None, timestamp: int | None = None):
        body = json.dumps(payload)
        sig = sign_payload(body, secret or settings.stripe_webhook_secret, timestamp)
        return client.post(
            "/webhook",
            content=body,
            headers={"Stripe-Signature": sig, "Content-Type": "application/json"},
        )

    return _deliver


@pytest.fixture
def checkout_event():
    def _make(event_id: str, session_id: str, payment_status: str | None = "paid") -> dict:
        session = {"id": session_id, "object": "checkout.session"}
        if payment_status is not None:
            session["payment_status"] = payment_status
        return {
            "id": event_id,
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": session},
        }

    return _make


@pytest.fixture
def strapi_products(respx_mock):
    """Serve product lookups by name; unknown names return an empty page."""

    def _register(products: dict):
        def lookup(request: httpx.Request) -> httpx.Response:
            name = request.url.params.get("filters[name][$eq]")
            entry = products.get(name)
            return httpx.Response(
                200, json={"data": [entry] if entry else [], "meta": {}}
            )

        return respx_mock.get(f"{STRAPI_URL}/api/products").mock(side_effect=lookup)

    return _register
