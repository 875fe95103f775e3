from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load .env if present
load_dotenv()

_DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173,"
    "https://secure-link-canara.vercel.app,"
    "https://secure-link-canara.vercel.app/shopping"
)


def _split_csv(raw: Optional[str], default: str) -> List[str]:
    return [item.strip() for item in (raw or default).split(",") if item.strip()]


def _env_bool(raw: Optional[str], default: bool = False) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class RazorpaySettings(BaseModel):
    """Razorpay API credentials and order defaults.

    Left empty for local development; order creation then fails upstream and
    signature verification rejects every request.
    """

    RAZORPAY_KEY_ID: str = Field(default="", description="Razorpay API key id")
    RAZORPAY_KEY_SECRET: str = Field(default="", description="Razorpay API key secret, also the signature HMAC key")
    RAZORPAY_BASE_URL: str = Field(default="https://api.razorpay.com", description="Razorpay REST API base URL")
    RAZORPAY_RECEIPT: str = Field(default="order_rcptid_11", description="Receipt label attached to created orders")
    RAZORPAY_TIMEOUT: float = Field(default=20.0, description="Upstream request timeout in seconds")


class APISettings(BaseModel):
    """FastAPI application settings."""

    API_TITLE: str = Field(default="Payment Gateway Backend", description="API title for OpenAPI")
    API_DESCRIPTION: str = Field(
        default="Payment gateway backend: Razorpay orders, payment signature checks and per-platform data encoding.",
        description="API description",
    )
    API_VERSION: str = Field(default="0.1.0", description="API version")
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: _split_csv(None, _DEFAULT_CORS_ORIGINS), description="CORS allowed origins"
    )
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["GET", "POST"], description="CORS allowed methods")
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["Content-Type"], description="CORS allowed headers")


class ServerSettings(BaseModel):
    """Bind address and runtime flags for the uvicorn runner."""

    HOST: str = Field(default="0.0.0.0", description="Bind host")
    PORT: int = Field(default=5001, description="Bind port")
    LOG_LEVEL: str = Field(default="info", description="uvicorn log level")
    RELOAD: bool = Field(default=False, description="Enable auto-reload (development only)")
    ENV: str = Field(default="development", description="Environment name")


class Settings(BaseModel):
    """Application configuration bundle.

    Per-platform encryption secrets (ENCRYPTION_KEY_<PLATFORM>) are not part of
    this bundle; they are read on every call through the secret provider in
    ``payment_gateway_backend.crypto.keys``.
    """

    razorpay: RazorpaySettings
    api: APISettings
    server: ServerSettings

    @staticmethod
    def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(name, default)

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        razorpay = RazorpaySettings(
            RAZORPAY_KEY_ID=cls._get_env("RAZORPAY_KEY_ID", "") or "",
            RAZORPAY_KEY_SECRET=cls._get_env("RAZORPAY_KEY_SECRET", "") or "",
            RAZORPAY_BASE_URL=cls._get_env("RAZORPAY_BASE_URL", "https://api.razorpay.com"),
            RAZORPAY_RECEIPT=cls._get_env("RAZORPAY_RECEIPT", "order_rcptid_11"),
            RAZORPAY_TIMEOUT=float(cls._get_env("RAZORPAY_TIMEOUT", "20") or "20"),
        )
        api = APISettings(
            API_TITLE=cls._get_env("API_TITLE", "Payment Gateway Backend"),
            API_DESCRIPTION=cls._get_env(
                "API_DESCRIPTION",
                "Payment gateway backend: Razorpay orders, payment signature checks and per-platform data encoding.",
            ),
            API_VERSION=cls._get_env("API_VERSION", "0.1.0"),
            CORS_ALLOW_ORIGINS=_split_csv(cls._get_env("CORS_ALLOW_ORIGINS"), _DEFAULT_CORS_ORIGINS),
            CORS_ALLOW_METHODS=_split_csv(cls._get_env("CORS_ALLOW_METHODS"), "GET,POST"),
            CORS_ALLOW_HEADERS=_split_csv(cls._get_env("CORS_ALLOW_HEADERS"), "Content-Type"),
        )
        try:
            port = int(cls._get_env("PORT", "5001") or "5001")
        except ValueError:
            port = 5001
        server = ServerSettings(
            HOST=cls._get_env("HOST", "0.0.0.0"),
            PORT=port,
            LOG_LEVEL=(cls._get_env("LOG_LEVEL", "info") or "info").lower(),
            RELOAD=_env_bool(cls._get_env("RELOAD"), False),
            ENV=cls._get_env("ENV", "development"),
        )
        return cls(razorpay=razorpay, api=api, server=server)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton access to application settings loaded from environment."""
    return Settings.from_env()
