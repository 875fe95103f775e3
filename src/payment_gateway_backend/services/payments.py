from __future__ import annotations

import hashlib
import hmac
from typing import Any, Dict, Optional

import httpx

from payment_gateway_backend.core.errors import OrderCreationFailed
from payment_gateway_backend.core.logging import get_logger
from payment_gateway_backend.core.settings import get_settings

logger = get_logger(__name__)


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (rupees) to minor units (paise)."""
    return int(round(amount * 100))


class RazorpayClient:
    """Razorpay Orders REST API client using HTTP basic auth with the key id/secret.

    Notes:
    - Uses {base_url}/v1/orders.
    - ``transport`` lets callers swap the network layer (e.g. httpx.MockTransport).
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str | None = None,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or "https://api.razorpay.com").rstrip("/")
        self.key_id = key_id
        self.key_secret = key_secret
        self.timeout = timeout
        self.transport = transport

    def _url(self, path: str) -> str:
        return f"{self.base_url}/v1{path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            auth=(self.key_id, self.key_secret),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            transport=self.transport,
        )

    async def create_order(
        self, amount: int, currency: str, receipt: str, notes: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Create an order; ``amount`` is already in minor units."""
        payload: Dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        try:
            async with self._client() as client:
                resp = await client.post(self._url("/orders"), json=payload)
        except httpx.HTTPError as exc:
            logger.error("razorpay_unreachable", extra={"error": type(exc).__name__})
            raise OrderCreationFailed() from exc
        if resp.status_code >= 400:
            # Upstream body may describe the failure; it is logged but never returned to callers
            logger.error("razorpay_order_failed", extra={"http_status": resp.status_code, "upstream": resp.text[:500]})
            raise OrderCreationFailed()
        try:
            order = resp.json()
        except ValueError as exc:
            logger.error("razorpay_order_unreadable", extra={"http_status": resp.status_code})
            raise OrderCreationFailed() from exc
        if not isinstance(order, dict) or not order.get("id"):
            logger.error("razorpay_order_unreadable", extra={"http_status": resp.status_code})
            raise OrderCreationFailed()
        logger.info(
            "razorpay_order_created",
            extra={"order_id": order.get("id"), "amount": order.get("amount"), "currency": order.get("currency")},
        )
        return order


# PUBLIC_INTERFACE
def get_razorpay_client() -> RazorpayClient:
    """FastAPI dependency building a client from settings."""
    settings = get_settings().razorpay
    return RazorpayClient(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_BASE_URL,
        timeout=settings.RAZORPAY_TIMEOUT,
    )


# PUBLIC_INTERFACE
def payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """HMAC-SHA256 hex digest of ``order_id|payment_id`` keyed with the API secret."""
    msg = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), msg, hashlib.sha256).hexdigest()


# PUBLIC_INTERFACE
def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    """Check a checkout callback signature in constant time. No secret means no match."""
    key = get_settings().razorpay.RAZORPAY_KEY_SECRET if secret is None else secret
    if not key or not signature:
        return False
    expected = payment_signature(order_id, payment_id, key)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
