# PUBLIC_INTERFACE
"""
Integration tests for /encode-data and /decode-data.
"""
import base64

from fastapi.testclient import TestClient

from payment_gateway_backend.app import app

client = TestClient(app)


def test_encode_then_decode_verbatim():
    body = {"platform": "Paytm", "course": "x", "qty": 2}
    r = client.post("/encode-data", json=body)
    assert r.status_code == 200
    encoded = r.json()
    assert encoded["platform"] == "Paytm"
    assert encoded["originalDataType"] == "object"
    assert encoded["encrypted"]["algorithm"] == "aes-256-cbc"
    assert "authTag" not in encoded["encrypted"]
    assert base64.b64decode(encoded["base64Encoded"]).decode() == '{"platform":"Paytm","course":"x","qty":2}'

    r2 = client.post("/decode-data", json=encoded)
    assert r2.status_code == 200
    assert r2.json() == {"data": body}


def test_stripe_response_carries_auth_tag():
    r = client.post("/encode-data", json={"platform": "Stripe", "amount": 10})
    assert r.status_code == 200
    encrypted = r.json()["encrypted"]
    assert encrypted["algorithm"] == "aes-256-gcm"
    assert len(encrypted["iv"]) == 24
    assert len(encrypted["authTag"]) == 32


def test_decode_with_request_naming_encrypted_only():
    encoded = client.post("/encode-data", json={"platform": "Phonepay", "note": "hi"}).json()
    r = client.post(
        "/decode-data",
        json={"platform": "Phonepay", "encryptedData": encoded["encrypted"], "dataType": "object"},
    )
    assert r.status_code == 200
    assert r.json()["data"] == {"platform": "Phonepay", "note": "hi"}


def test_encode_invalid_platform():
    r = client.post("/encode-data", json={"platform": "Unknown", "a": 1})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid platform. Must be one of: Razorpay, Stripe, Paytm, Phonepay"
    assert r.json()["code"] == "INVALID_PLATFORM"


def test_encode_missing_platform():
    r = client.post("/encode-data", json={"a": 1})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_PLATFORM"


def test_encode_empty_body():
    r = client.post("/encode-data")
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"

    r = client.post("/encode-data", json={})
    assert r.status_code == 400


def test_encode_non_object_body():
    r = client.post("/encode-data", json=["Stripe"])
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_malformed_json_is_a_client_error():
    r = client.post("/decode-data", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_decode_invalid_platform():
    r = client.post("/decode-data", json={"platform": "Unknown", "base64Encoded": "eyJhIjoxfQ=="})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_PLATFORM"


def test_decode_missing_input():
    r = client.post("/decode-data", json={"platform": "Razorpay"})
    assert r.status_code == 400
    assert r.json() == {
        "error": "No data provided. Please provide encoded data in either format.",
        "code": "MISSING_INPUT",
    }


def test_decode_failure_without_fallback(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY_RAZORPAY", "producer")
    encoded = client.post("/encode-data", json={"platform": "Razorpay", "a": 1}).json()
    monkeypatch.setenv("ENCRYPTION_KEY_RAZORPAY", "consumer")
    r = client.post(
        "/decode-data",
        json={"platform": "Razorpay", "encrypted": encoded["encrypted"], "originalDataType": "object"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "DECRYPTION_FAILED"
    assert r.json()["error"].startswith("Failed to decrypt data for platform: Razorpay.")


def test_decode_fallback_to_base64_on_corrupted_cipher():
    encoded = client.post("/encode-data", json={"platform": "Stripe", "a": 1}).json()
    encoded["encrypted"]["authTag"] = "00" * 16
    r = client.post("/decode-data", json=encoded)
    assert r.status_code == 200
    assert r.json()["data"] == {"platform": "Stripe", "a": 1}


def test_secret_from_environment_roundtrip(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY_PAYTM", "configured-secret")
    encoded = client.post("/encode-data", json={"platform": "Paytm", "a": 1}).json()
    encoded.pop("base64Encoded")
    r = client.post("/decode-data", json=encoded)
    assert r.status_code == 200
    assert r.json()["data"] == {"platform": "Paytm", "a": 1}


def test_decode_non_string_base64():
    r = client.post("/decode-data", json={"platform": "Paytm", "base64Encoded": 123})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_encode_lone_surrogate_is_replaced():
    r = client.post(
        "/encode-data",
        content=b'{"platform":"Paytm","name":"\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 200
    decoded = client.post("/decode-data", json=r.json())
    assert decoded.status_code == 200
    assert decoded.json()["data"] == {"platform": "Paytm", "name": "\ufffd"}


def test_decode_deeply_nested_base64_returns_text():
    text = "[" * 100000 + "]" * 100000
    encoded = base64.b64encode(text.encode()).decode()
    r = client.post(
        "/decode-data",
        json={"platform": "Paytm", "base64Encoded": encoded, "originalDataType": "object"},
    )
    assert r.status_code == 200
    assert r.json()["data"] == text


def test_decode_encrypted_without_iv_is_no_result():
    r = client.post("/decode-data", json={"platform": "Paytm", "encrypted": {"content": "00"}})
    assert r.status_code == 400
    assert r.json()["code"] == "NO_RESULT"
