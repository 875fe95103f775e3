import pytest

from payment_gateway_backend.core.settings import get_settings

PLATFORM_SECRETS = [
    "ENCRYPTION_KEY_RAZORPAY",
    "ENCRYPTION_KEY_STRIPE",
    "ENCRYPTION_KEY_PAYTM",
    "ENCRYPTION_KEY_PHONEPAY",
]


@pytest.fixture(autouse=True)
def _clean_platform_secrets(monkeypatch):
    # Tests start from the default-secret fallback unless they set a secret themselves
    for name in PLATFORM_SECRETS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def razorpay_secret(monkeypatch):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "rzp_test_secret")
    get_settings.cache_clear()
    yield "rzp_test_secret"
    get_settings.cache_clear()
