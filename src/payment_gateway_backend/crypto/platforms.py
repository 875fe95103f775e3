from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from payment_gateway_backend.core.errors import InvalidPlatform


class Platform(str, Enum):
    """Payment platforms a payload can be encoded for."""

    RAZORPAY = "Razorpay"
    STRIPE = "Stripe"
    PAYTM = "Paytm"
    PHONEPAY = "Phonepay"


@dataclass(frozen=True)
class CipherSpec:
    algorithm: str
    iv_length: int


# Shared by the encode and decode paths; changing an entry breaks decoding of
# payloads produced before the change.
CIPHER_TABLE: Dict[Platform, CipherSpec] = {
    Platform.RAZORPAY: CipherSpec("aes-256-ctr", 16),
    Platform.STRIPE: CipherSpec("aes-256-gcm", 12),
    Platform.PAYTM: CipherSpec("aes-256-cbc", 16),
    Platform.PHONEPAY: CipherSpec("camellia-256-cbc", 16),
}

VALID_PLATFORMS = tuple(p.value for p in Platform)


# PUBLIC_INTERFACE
def parse_platform(value: object) -> Platform:
    """Return the Platform named by value (case-sensitive) or raise InvalidPlatform."""
    if isinstance(value, Platform):
        return value
    if isinstance(value, str):
        try:
            return Platform(value)
        except ValueError:
            pass
    raise InvalidPlatform(value, VALID_PLATFORMS)


# PUBLIC_INTERFACE
def select_cipher(platform: Platform) -> CipherSpec:
    """Return the algorithm and IV length used for a platform."""
    return CIPHER_TABLE[platform]
