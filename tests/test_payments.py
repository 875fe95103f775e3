# PUBLIC_INTERFACE
"""
Tests for Razorpay order creation (mocked transport) and payment signature verification.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from payment_gateway_backend.app import app
from payment_gateway_backend.core.errors import OrderCreationFailed
from payment_gateway_backend.services.payments import (
    RazorpayClient,
    get_razorpay_client,
    payment_signature,
    to_minor_units,
    verify_payment_signature,
)

client = TestClient(app)


def _order_transport(captured: list, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        body = json.loads(request.content)
        if status_code >= 400:
            return httpx.Response(status_code, json={"error": {"code": "BAD_REQUEST_ERROR"}})
        return httpx.Response(
            200,
            json={"id": "order_test_123", "entity": "order", "amount": body["amount"], "currency": body["currency"], "status": "created"},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def override_client():
    def _install(transport):
        app.dependency_overrides[get_razorpay_client] = lambda: RazorpayClient(
            "rzp_test_key", "rzp_test_secret", base_url="https://razorpay.test", transport=transport
        )

    yield _install
    app.dependency_overrides.pop(get_razorpay_client, None)


def test_to_minor_units():
    assert to_minor_units(499) == 49900
    assert to_minor_units(19.99) == 1999
    assert to_minor_units(0.5) == 50


def test_create_order(override_client):
    captured = []
    override_client(_order_transport(captured))
    r = client.post("/create-order", json={"amount": 499.5, "currency": "INR", "notes": {"sku": "c-1"}})
    assert r.status_code == 200
    assert r.json() == {"id": "order_test_123", "currency": "INR", "amount": 49950}

    sent = captured[0]
    assert str(sent.url) == "https://razorpay.test/v1/orders"
    assert sent.headers["Authorization"].startswith("Basic ")
    body = json.loads(sent.content)
    assert body["amount"] == 49950
    assert body["notes"] == {"sku": "c-1"}
    assert body["receipt"] == "order_rcptid_11"


def test_create_order_upstream_failure(override_client):
    override_client(_order_transport([], status_code=401))
    r = client.post("/create-order", json={"amount": 10, "currency": "INR"})
    assert r.status_code == 500
    assert r.json() == {"error": "Error creating Razorpay order", "code": "ORDER_CREATION_FAILED"}


def test_create_order_validation():
    r = client.post("/create-order", json={"currency": "INR"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
    r = client.post("/create-order", json={"amount": -5, "currency": "INR"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_client_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    rzp = RazorpayClient("k", "s", transport=httpx.MockTransport(handler))
    with pytest.raises(OrderCreationFailed):
        await rzp.create_order(amount=100, currency="INR", receipt="r")


@pytest.mark.asyncio
async def test_client_defaults_notes():
    captured = []
    rzp = RazorpayClient("k", "s", base_url="https://razorpay.test/", transport=_order_transport(captured))
    order = await rzp.create_order(amount=100, currency="USD", receipt="r-1")
    assert order["id"] == "order_test_123"
    assert json.loads(captured[0].content)["notes"] == {}
    assert str(captured[0].url) == "https://razorpay.test/v1/orders"


def test_signature_helpers():
    sig = payment_signature("order_1", "pay_1", "secret")
    assert len(sig) == 64
    assert verify_payment_signature("order_1", "pay_1", sig, secret="secret")
    assert not verify_payment_signature("order_1", "pay_2", sig, secret="secret")
    assert not verify_payment_signature("order_1", "pay_1", sig, secret="")
    assert not verify_payment_signature("order_1", "pay_1", "é" + sig[1:], secret="secret")


def test_verify_payment_success(razorpay_secret):
    sig = payment_signature("order_1", "pay_1", razorpay_secret)
    r = client.post("/verify-payment", json={"order_id": "order_1", "payment_id": "pay_1", "signature": sig})
    assert r.status_code == 200
    assert r.json() == {"message": "Payment verification successful"}


def test_verify_payment_mismatch(razorpay_secret):
    sig = payment_signature("order_1", "pay_1", "some-other-secret")
    r = client.post("/verify-payment", json={"order_id": "order_1", "payment_id": "pay_1", "signature": sig})
    assert r.status_code == 400
    assert r.json() == {"error": "Payment verification failed", "code": "VERIFICATION_FAILED"}


def test_verify_payment_missing_fields():
    r = client.post("/verify-payment", json={"order_id": "order_1"})
    assert r.status_code == 400
