"""
oneseed - Named Derivations

Purpose paths used by the downstream formatters, plus raw bytes and
mnemonic entropy. Encoding (age, OpenSSH, BIP39 words) happens elsewhere;
this module only hands out the bytes.
"""

from typing import Dict

from .errors import InvalidParameterError
from .seed import Seed

# BIP39 word count → entropy bytes
MNEMONIC_ENTROPY_BYTES: Dict[int, int] = {
    12: 16,  # 128 bits
    15: 20,  # 160 bits
    18: 24,  # 192 bits
    21: 28,  # 224 bits
    24: 32,  # 256 bits
}


def raw(seed: Seed, realm: str, path: str, length: int = 32) -> bytes:
    """Derive `length` raw bytes under the caller-chosen path raw/{path}."""
    return seed.derive(realm, f"raw/{path}", length)


def mnemonic_entropy(seed: Seed, realm: str, words: int = 24) -> bytes:
    """
    Derive the entropy behind a BIP39 mnemonic of `words` words.

    Raises:
        InvalidParameterError: If words is not 12, 15, 18, 21 or 24
    """
    try:
        entropy_bytes = MNEMONIC_ENTROPY_BYTES[words]
    except (KeyError, TypeError):
        raise InvalidParameterError(
            "word count", words, "must be 12, 15, 18, 21, or 24"
        ) from None
    return seed.derive(realm, "mnemonic", entropy_bytes)


def age_key(seed: Seed, realm: str) -> bytes:
    """32-byte X25519 secret for the age identity."""
    return seed.derive_32(realm, "age")


def ssh_key(seed: Seed, realm: str) -> bytes:
    """32-byte Ed25519 seed for the SSH key."""
    return seed.derive_32(realm, "ssh")


def signing_key(seed: Seed, realm: str) -> bytes:
    """32-byte Ed25519 seed for detached signatures."""
    return seed.derive_32(realm, "sign")
