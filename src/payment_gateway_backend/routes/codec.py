from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from payment_gateway_backend.core.errors import DecodingFailed, ErrorResponse, GatewayError, InvalidRequest
from payment_gateway_backend.core.logging import get_logger
from payment_gateway_backend.crypto.keys import EnvSecretProvider, SecretProvider
from payment_gateway_backend.services import codec

router = APIRouter(tags=["codec"])
logger = get_logger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid platform or request body"},
    500: {"model": ErrorResponse, "description": "Internal failure"},
}


# PUBLIC_INTERFACE
def get_secret_provider() -> SecretProvider:
    """Platform secrets are read from the environment on every request."""
    return EnvSecretProvider()


@router.post(
    "/encode-data",
    response_model=codec.EncodedPayload,
    response_model_exclude_none=True,
    summary="Encode a payload for a platform",
    description="""
The whole JSON body is the payload; its `platform` field (Razorpay, Stripe, Paytm or Phonepay)
selects the cipher. Returns the base64 rendering and the encrypted rendering of the payload.
""",
    responses={
        200: {
            "description": "Payload encoded",
            "content": {
                "application/json": {
                    "example": {
                        "platform": "Paytm",
                        "base64Encoded": "eyJwbGF0Zm9ybSI6IlBheXRtIn0=",
                        "encrypted": {"algorithm": "aes-256-cbc", "iv": "9f1c...", "content": "5a7e..."},
                        "originalDataType": "object",
                    }
                }
            },
        },
        **_ERRORS,
    },
)
def encode_data(payload: Optional[Any] = Body(default=None), secrets: SecretProvider = Depends(get_secret_provider)):
    """Encode the request body for the platform it names."""
    if not payload:
        raise InvalidRequest("No data provided in request body")
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body must be a JSON object with a platform field")
    logger.info("encode_request", extra={"platform": str(payload.get("platform"))})
    return codec.encode(payload, payload.get("platform"), secrets)


@router.post(
    "/decode-data",
    response_model=codec.DecodedResult,
    summary="Decode a payload",
    description="""
Accepts either the encode-data response as-is (`base64Encoded`, `encrypted`, `originalDataType`, `platform`)
or the request naming (`encodedData`, `encryptedData`, `dataType`, `platform`). The encode-data naming wins
when both are present. When both renderings are supplied the base64 rendering is returned.
""",
    responses={
        200: {"description": "Payload recovered", "content": {"application/json": {"example": {"data": {"course": "x"}}}}},
        **_ERRORS,
    },
)
def decode_data(body: Optional[Any] = Body(default=None), secrets: SecretProvider = Depends(get_secret_provider)):
    """Recover a payload from its base64 and/or encrypted rendering."""
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")
    request = codec.normalize_decode_request(body)
    logger.info("decode_request", extra={"platform": str(request.platform)})
    try:
        return codec.decode(request, secrets)
    except GatewayError:
        raise
    except Exception:
        logger.exception("decode_failed", extra={"platform": str(request.platform)})
        raise DecodingFailed()
