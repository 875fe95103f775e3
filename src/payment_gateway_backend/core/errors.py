# PUBLIC_INTERFACE
"""
Error types raised by the services and their unified JSON rendering.

Every error carries an HTTP status and a stable machine-readable code; the
app-level handler turns them into ``{"error": <message>, "code": <code>}``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel, Field


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str = Field(..., description="Human readable error message")
    code: str = Field(..., description="Stable error code")


class ErrorCode:
    INVALID_PLATFORM = "INVALID_PLATFORM"
    MISSING_INPUT = "MISSING_INPUT"
    VALIDATION = "VALIDATION_ERROR"
    ENCODING_FAILED = "ENCODING_FAILED"
    DECODING_FAILED = "DECODING_FAILED"
    DECRYPTION_FAILED = "DECRYPTION_FAILED"
    NO_RESULT = "NO_RESULT"
    ORDER_CREATION_FAILED = "ORDER_CREATION_FAILED"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


class GatewayError(HTTPException):
    """Base class: an HTTPException with a stable error code."""

    code: str = "INTERNAL"

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR, code: Optional[str] = None):
        super().__init__(status_code=status_code, detail=message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self.detail)

    def to_body(self) -> dict:
        return ErrorResponse(error=self.message, code=self.code).model_dump()


class InvalidPlatform(GatewayError):
    code = ErrorCode.INVALID_PLATFORM

    def __init__(self, platform: object = None, valid: Iterable[str] = ()):
        self.platform = platform
        super().__init__(
            f"Invalid platform. Must be one of: {', '.join(valid)}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class MissingInput(GatewayError):
    code = ErrorCode.MISSING_INPUT

    def __init__(self, message: str = "No data provided. Please provide encoded data in either format."):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class InvalidRequest(GatewayError):
    code = ErrorCode.VALIDATION

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class EncodingFailed(GatewayError):
    code = ErrorCode.ENCODING_FAILED

    def __init__(self, message: str = "Failed to encode data"):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class DecodingFailed(GatewayError):
    code = ErrorCode.DECODING_FAILED

    def __init__(self, message: str = "Failed to decode data"):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class DecryptionFailed(GatewayError):
    code = ErrorCode.DECRYPTION_FAILED

    def __init__(self, platform: str, detail: str):
        self.platform = platform
        self.reason = detail
        super().__init__(
            f"Failed to decrypt data for platform: {platform}. {detail}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class NoResult(GatewayError):
    code = ErrorCode.NO_RESULT

    def __init__(self, message: str = "Could not decode or decrypt the provided data"):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class OrderCreationFailed(GatewayError):
    code = ErrorCode.ORDER_CREATION_FAILED

    def __init__(self, message: str = "Error creating Razorpay order"):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class PaymentVerificationFailed(GatewayError):
    code = ErrorCode.VERIFICATION_FAILED

    def __init__(self, message: str = "Payment verification failed"):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)
