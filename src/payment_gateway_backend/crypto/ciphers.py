from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

GCM_ALGORITHM = "aes-256-gcm"


class UnsupportedAlgorithm(ValueError):
    pass


def _aes(key: bytes) -> algorithms.AES:
    return algorithms.AES(key)


def _camellia(key: bytes) -> algorithms.Camellia:
    return algorithms.Camellia(key)


# algorithm name -> (block cipher factory, mode factory, padded)
_ALGORITHMS: Dict[str, Tuple[Callable, Callable, bool]] = {
    "aes-256-ctr": (_aes, modes.CTR, False),
    "aes-256-gcm": (_aes, modes.GCM, False),
    "aes-256-cbc": (_aes, modes.CBC, True),
    "camellia-256-cbc": (_camellia, modes.CBC, True),
}


def _lookup(algorithm: str) -> Tuple[Callable, Callable, bool]:
    try:
        return _ALGORITHMS[algorithm]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {algorithm}") from None


# PUBLIC_INTERFACE
def encrypt(algorithm: str, key: bytes, iv: bytes, plaintext: bytes) -> Tuple[bytes, Optional[bytes]]:
    """Encrypt plaintext; returns (ciphertext, auth tag). The tag is None except for GCM."""
    block, mode, padded = _lookup(algorithm)
    if padded:
        padder = padding.PKCS7(128).padder()
        plaintext = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(block(key), mode(iv)).encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    tag = encryptor.tag if algorithm == GCM_ALGORITHM else None
    return ciphertext, tag


# PUBLIC_INTERFACE
def decrypt(algorithm: str, key: bytes, iv: bytes, ciphertext: bytes, tag: Optional[bytes] = None) -> bytes:
    """Decrypt ciphertext. GCM verifies ``tag`` and fails without one."""
    block, mode, padded = _lookup(algorithm)
    if algorithm == GCM_ALGORITHM:
        if not tag:
            raise ValueError("Unsupported state or unable to authenticate data")
        cipher_mode = modes.GCM(iv, tag)
    else:
        cipher_mode = mode(iv)
    decryptor = Cipher(block(key), cipher_mode).decryptor()
    plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    if padded:
        unpadder = padding.PKCS7(128).unpadder()
        plaintext = unpadder.update(plaintext) + unpadder.finalize()
    return plaintext
