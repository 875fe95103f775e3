"""
Module runner to start the FastAPI server.

Usage:
    python -m payment_gateway_backend.run
or, once installed:
    payment-gateway-backend
"""
import uvicorn

from .core.logging import get_logger
from .core.settings import get_settings

logger = get_logger(__name__)


# PUBLIC_INTERFACE
def main():
    """Entry point to start the FastAPI server with environment-based configuration."""
    server = get_settings().server
    logger.info(
        "server_starting",
        extra={"host": server.HOST, "port": server.PORT, "reload": server.RELOAD, "log_level": server.LOG_LEVEL},
    )
    # reload needs an import string rather than an app object
    uvicorn.run(
        "payment_gateway_backend.app:app",
        host=server.HOST,
        port=server.PORT,
        reload=server.RELOAD,
        log_level=server.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
