# PUBLIC_INTERFACE
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.errors import ErrorCode, ErrorResponse, GatewayError
from .core.logging import get_logger
from .core.observability import RequestContextMiddleware
from .core.settings import get_settings
from .routes.codec import router as codec_router
from .routes.health import router as health_router
from .routes.payments import router as payments_router

logger = get_logger(__name__)


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request body")
    if where:
        message = f"{where}: {message}"
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=message, code=ErrorCode.VALIDATION).model_dump(),
    )


# PUBLIC_INTERFACE
def create_app() -> FastAPI:
    """Create and configure the FastAPI app instance with CORS, request context and routers."""
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info(
            "startup_complete",
            extra={"host": settings.server.HOST, "port": settings.server.PORT, "env": settings.server.ENV},
        )
        yield

    app = FastAPI(
        title=settings.api.API_TITLE,
        description=settings.api.API_DESCRIPTION,
        version=settings.api.API_VERSION,
        openapi_tags=[
            {"name": "root", "description": "Root information"},
            {"name": "health", "description": "Health and metrics endpoints"},
            {"name": "payments", "description": "Razorpay order creation and payment signature verification"},
            {"name": "codec", "description": "Per-platform payload encoding and decoding"},
        ],
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.CORS_ALLOW_ORIGINS,
        allow_methods=settings.api.CORS_ALLOW_METHODS,
        allow_headers=settings.api.CORS_ALLOW_HEADERS,
    )
    # Correlation ID / request context middleware
    app.add_middleware(RequestContextMiddleware, logger=get_logger("payment_gateway_backend.access"))

    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health_router)
    app.include_router(payments_router)
    app.include_router(codec_router)
    return app


# Expose app for ASGI import if this module is used directly.
app = create_app()
