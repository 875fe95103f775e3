from fastapi import APIRouter, Depends

from payment_gateway_backend.core.api_models import CreateOrderRequest, OrderCreated, VerificationResult, VerifyPaymentRequest
from payment_gateway_backend.core.errors import ErrorResponse, PaymentVerificationFailed
from payment_gateway_backend.core.logging import get_logger
from payment_gateway_backend.core.observability import increment_metric, mask_secret_value
from payment_gateway_backend.core.settings import get_settings
from payment_gateway_backend.services.payments import (
    RazorpayClient,
    get_razorpay_client,
    to_minor_units,
    verify_payment_signature,
)

router = APIRouter(tags=["payments"])
logger = get_logger(__name__)


# PUBLIC_INTERFACE
@router.post(
    "/create-order",
    response_model=OrderCreated,
    summary="Create a Razorpay order",
    description="Converts the amount to minor units (x100) and creates an order with Razorpay.",
    responses={
        200: {
            "description": "Order created",
            "content": {"application/json": {"example": {"id": "order_9A33XWu170gUtm", "currency": "INR", "amount": 49900}}},
        },
        400: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Razorpay rejected or could not be reached"},
    },
)
async def create_order(payload: CreateOrderRequest, client: RazorpayClient = Depends(get_razorpay_client)):
    """Create an order for the storefront checkout."""
    order = await client.create_order(
        amount=to_minor_units(payload.amount),
        currency=payload.currency,
        receipt=get_settings().razorpay.RAZORPAY_RECEIPT,
        notes=payload.notes,
    )
    increment_metric("orders_created_total")
    return OrderCreated(
        id=order["id"],
        currency=order.get("currency", payload.currency),
        amount=order.get("amount", to_minor_units(payload.amount)),
    )


# PUBLIC_INTERFACE
@router.post(
    "/verify-payment",
    response_model=VerificationResult,
    summary="Verify a payment signature",
    description="Recomputes HMAC-SHA256 over `order_id|payment_id` with the Razorpay key secret and compares it with the supplied signature.",
    responses={
        200: {"description": "Signature matches", "content": {"application/json": {"example": {"message": "Payment verification successful"}}}},
        400: {"model": ErrorResponse, "description": "Signature mismatch or invalid body"},
    },
)
def verify_payment(payload: VerifyPaymentRequest):
    """Accept the payment only if the checkout signature matches."""
    if not verify_payment_signature(payload.order_id, payload.payment_id, payload.signature):
        increment_metric("payments_rejected_total")
        logger.warning(
            "payment_rejected",
            extra={"order_id": payload.order_id, "signature": mask_secret_value(payload.signature)},
        )
        raise PaymentVerificationFailed()
    increment_metric("payments_verified_total")
    logger.info("payment_verified", extra={"order_id": payload.order_id, "payment_id": payload.payment_id})
    return VerificationResult(message="Payment verification successful")
