# PUBLIC_INTERFACE
"""
Per-platform payload encoding and decoding.

``encode`` turns any JSON-compatible payload into a base64 rendering plus an
encrypted rendering using the platform's cipher. ``decode`` reverses either
rendering; when both are supplied the base64 rendering wins, and a failed
decryption is tolerated as long as the base64 rendering decoded.
"""
from __future__ import annotations

import base64
import binascii
import json
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from cryptography.exceptions import InvalidTag
from pydantic import BaseModel, Field

from payment_gateway_backend.core.errors import (
    DecryptionFailed,
    EncodingFailed,
    InvalidRequest,
    MissingInput,
    NoResult,
)
from payment_gateway_backend.core.logging import get_logger
from payment_gateway_backend.core.observability import increment_metric
from payment_gateway_backend.crypto import ciphers
from payment_gateway_backend.crypto.keys import SecretProvider, derive_key
from payment_gateway_backend.crypto.platforms import Platform, parse_platform, select_cipher

logger = get_logger(__name__)

OBJECT_TYPE = "object"

# Marks a decode stage that produced nothing (None is a valid payload)
MISSING: Any = object()

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/\-_]")


class EncryptedData(BaseModel):
    """Encrypted rendering of a payload (hex-encoded IV, ciphertext and tag)."""
    algorithm: str = Field(..., description="Cipher name, e.g. aes-256-gcm")
    iv: str = Field(..., description="Initialization vector, hex")
    content: str = Field(..., description="Ciphertext, hex")
    authTag: Optional[str] = Field(default=None, description="GCM authentication tag, hex (GCM only)")


class EncodedPayload(BaseModel):
    """Result of encoding a payload for one platform."""
    platform: str = Field(..., description="Platform the payload was encoded for")
    base64Encoded: str = Field(..., description="Base64 of the UTF-8 canonical string")
    encrypted: EncryptedData
    originalDataType: str = Field(..., description="'object' for structured payloads, else the primitive type name")


class DecodedResult(BaseModel):
    """Recovered payload."""
    data: Any = Field(default=None, description="Original payload (object or string)")


@dataclass(frozen=True)
class DecodeInput:
    """Canonical decode request, independent of which field names the caller used."""
    platform: Any
    encoded: Any = None
    encrypted: Any = None
    data_type: Optional[str] = None


def _present(value: Any) -> bool:
    # Empty strings, empty objects and null count as absent
    return value is not None and value != "" and value != {}


def _first(body: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = body.get(name)
        if _present(value):
            return value
    return None


# PUBLIC_INTERFACE
def normalize_decode_request(body: Mapping[str, Any]) -> DecodeInput:
    """Map either the request naming or the encode-output naming onto DecodeInput.

    Precedence: ``base64Encoded`` over ``encodedData``, ``encrypted`` over
    ``encryptedData``, ``originalDataType`` over ``dataType``.
    """
    data_type = _first(body, "originalDataType", "dataType")
    return DecodeInput(
        platform=body.get("platform"),
        encoded=_first(body, "base64Encoded", "encodedData"),
        encrypted=_first(body, "encrypted", "encryptedData"),
        data_type=data_type if isinstance(data_type, str) else None,
    )


def data_type_of(payload: Any) -> str:
    """Name the payload's type the way JSON clients see it."""
    if payload is None or isinstance(payload, (dict, list, tuple)):
        return OBJECT_TYPE
    if isinstance(payload, bool):
        return "boolean"
    if isinstance(payload, (int, float)):
        return "number"
    return "string"


def _replace_lone_surrogates(text: str) -> str:
    # JSON bodies may carry unpaired \uD800-\uDFFF escapes; UTF-8 cannot encode them
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


# PUBLIC_INTERFACE
def canonical_string(payload: Any) -> str:
    """Compact JSON for structured payloads, the literal text for primitives."""
    if data_type_of(payload) == OBJECT_TYPE:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    if isinstance(payload, bool):
        return "true" if payload else "false"
    if isinstance(payload, float) and payload.is_integer():
        return str(int(payload))
    return str(payload)


# PUBLIC_INTERFACE
def encode(payload: Any, platform: Any, secrets: Optional[SecretProvider] = None) -> EncodedPayload:
    """Produce the base64 and encrypted renderings of payload for a platform."""
    target = parse_platform(platform)
    try:
        text = canonical_string(payload)
        raw = _replace_lone_surrogates(text).encode("utf-8")
        spec = select_cipher(target)
        key = derive_key(target, secrets)
        iv = os.urandom(spec.iv_length)
        ciphertext, tag = ciphers.encrypt(spec.algorithm, key, iv, raw)
    except Exception:
        # Payload contents stay out of the logs
        logger.exception("encode_failed", extra={"platform": target.value})
        raise EncodingFailed()

    increment_metric("encode_total")
    logger.info("encoded", extra={"platform": target.value, "algorithm": spec.algorithm})
    return EncodedPayload(
        platform=target.value,
        base64Encoded=base64.b64encode(raw).decode("ascii"),
        encrypted=EncryptedData(
            algorithm=spec.algorithm,
            iv=iv.hex(),
            content=ciphertext.hex(),
            authTag=tag.hex() if tag is not None else None,
        ),
        originalDataType=data_type_of(payload),
    )


def _lenient_b64decode(value: str) -> bytes:
    """Decode base64 the forgiving way browsers and Node do.

    Stops at the first '=', ignores characters outside the standard and
    URL-safe alphabets and tolerates missing padding.
    """
    cleaned = _NON_BASE64.sub("", value.split("=", 1)[0])
    cleaned = cleaned.replace("-", "+").replace("_", "/")
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    return base64.b64decode(cleaned + "=" * (-len(cleaned) % 4))


def _decode_base64_stage(encoded: Any, data_type: Optional[str]) -> Any:
    if not isinstance(encoded, str):
        raise InvalidRequest("Encoded data must be a base64 string")
    try:
        text = _lenient_b64decode(encoded).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        raise InvalidRequest("Encoded data is not valid base64")
    if data_type != OBJECT_TYPE:
        return text
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        # Not JSON after all; the raw text is still useful
        return text


def _decrypt_stage(platform: Platform, encrypted: Dict[str, Any], data_type: Optional[str], secrets: Optional[SecretProvider]) -> Any:
    algorithm = encrypted.get("algorithm") or select_cipher(platform).algorithm
    key = derive_key(platform, secrets)
    iv = bytes.fromhex(encrypted["iv"])
    tag = None
    if algorithm == ciphers.GCM_ALGORITHM and encrypted.get("authTag"):
        tag = bytes.fromhex(encrypted["authTag"])
    plaintext = ciphers.decrypt(algorithm, key, iv, bytes.fromhex(encrypted["content"]), tag)
    text = plaintext.decode("utf-8", errors="replace")
    if data_type == OBJECT_TYPE:
        return json.loads(text)
    return text


def merge_results(decoded: Any = MISSING, decrypted: Any = MISSING) -> Any:
    """Pick the result to return: the base64 rendering wins over the decrypted one."""
    if decoded is not MISSING:
        return decoded
    if decrypted is not MISSING:
        return decrypted
    raise NoResult()


# PUBLIC_INTERFACE
def decode(request: DecodeInput, secrets: Optional[SecretProvider] = None) -> DecodedResult:
    """Recover the original payload from a base64 rendering, an encrypted rendering, or both."""
    platform = parse_platform(request.platform)
    if not _present(request.encoded) and not _present(request.encrypted):
        raise MissingInput()

    decoded: Any = MISSING
    if _present(request.encoded):
        decoded = _decode_base64_stage(request.encoded, request.data_type)

    decrypted: Any = MISSING
    encrypted = request.encrypted
    if isinstance(encrypted, dict) and encrypted.get("iv") and encrypted.get("content"):
        try:
            decrypted = _decrypt_stage(platform, encrypted, request.data_type, secrets)
        except (ValueError, TypeError, RecursionError, InvalidTag) as exc:
            detail = str(exc) or type(exc).__name__
            logger.warning("decrypt_failed", extra={"platform": platform.value, "error": detail})
            if decoded is MISSING:
                raise DecryptionFailed(platform.value, detail)
            increment_metric("decrypt_fallback_total")

    increment_metric("decode_total")
    return DecodedResult(data=merge_results(decoded, decrypted))
