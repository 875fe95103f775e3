from fastapi import APIRouter

from payment_gateway_backend.core.api_models import HealthResponse, WelcomeResponse
from payment_gateway_backend.core.observability import metrics_snapshot

router = APIRouter()


@router.get("/", response_model=WelcomeResponse, tags=["root"], summary="Root", description="Root endpoint to verify API is running.")
def read_root():
    """Return a simple greeting to confirm the API is live."""
    return WelcomeResponse(message="Welcome to the Razorpay Payment Gateway API")


@router.get("/health", response_model=HealthResponse, tags=["health"], summary="Liveness probe", description="Simple liveness check endpoint.")
def health():
    """Return liveness status for health checks."""
    return HealthResponse(status="ok")


# PUBLIC_INTERFACE
@router.get(
    "/_metrics",
    tags=["health"],
    summary="Metrics (basic)",
    description="Basic in-process counters for observability.",
    responses={200: {"content": {"application/json": {"example": {"requests_total": 10.0, "encode_total": 3.0}}}}},
)
def metrics():
    """Return basic service metrics (process-local) for quick visibility."""
    return metrics_snapshot()
