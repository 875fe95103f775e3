from __future__ import annotations

import base64
import hashlib
import os
from typing import Callable, Optional, Union

from payment_gateway_backend.crypto.platforms import Platform

# (secret_name) -> secret value or None
SecretProvider = Callable[[str], Optional[str]]


class EnvSecretProvider:
    """Read platform secrets from the process environment on every call."""

    def __call__(self, name: str) -> Optional[str]:
        return os.environ.get(name)


def secret_name_for(platform_name: str) -> str:
    return f"ENCRYPTION_KEY_{platform_name.upper()}"


def default_secret_for(platform_name: str) -> str:
    return f"defaultKey-{platform_name.lower()}"


# PUBLIC_INTERFACE
def derive_key(platform: Union[Platform, str], secrets: Optional[SecretProvider] = None) -> bytes:
    """Derive the 32-byte cipher key for a platform.

    The key is the first 32 characters of the base64-encoded SHA-256 digest of
    the configured secret (or of ``defaultKey-<platform>`` when none is set),
    taken as ASCII bytes. This keeps keys compatible with payloads produced by
    the existing storefront tooling; it carries less entropy than the raw
    digest would.
    """
    name = platform.value if isinstance(platform, Platform) else str(platform)
    provider = secrets or EnvSecretProvider()
    secret = provider(secret_name_for(name))
    if not secret:
        secret = default_secret_for(name)
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")[:32].encode("ascii")
