from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class WelcomeResponse(BaseModel):
    message: str = Field(..., description="Welcome text")


class HealthResponse(BaseModel):
    """Response model for health checks."""
    status: str = Field(..., description="Overall service status string, e.g. 'ok'.")


class CreateOrderRequest(BaseModel):
    """Payload to create a Razorpay order. ``amount`` is in major units (rupees)."""
    amount: float = Field(..., gt=0, description="Order amount in major currency units, e.g. 499.0")
    currency: str = Field(default="INR", min_length=3, max_length=3, description="ISO currency code")
    notes: Optional[Dict[str, Any]] = Field(default=None, description="Free-form key/value notes stored on the order")


class OrderCreated(BaseModel):
    """Minimal normalized response when an order is created."""
    id: str = Field(..., description="Razorpay order id, e.g. order_9A33XWu170gUtm")
    currency: str = Field(..., description="Order currency")
    amount: int = Field(..., description="Order amount in minor units (paise)")


class VerifyPaymentRequest(BaseModel):
    """Fields returned by Razorpay checkout after a successful payment."""
    payment_id: str = Field(..., description="Razorpay payment id")
    order_id: str = Field(..., description="Razorpay order id")
    signature: str = Field(..., description="Hex HMAC-SHA256 signature supplied by checkout")


class VerificationResult(BaseModel):
    message: str = Field(..., description="Verification outcome")
