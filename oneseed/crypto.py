"""
oneseed - Cryptography Module

All low-level cryptographic operations live here:

    1. Passphrase → scrypt → Master Key (32 bytes)
    2. Master Key → HKDF("v1/{realm}/{purpose}") → Derived material

Why this is secure:
    - scrypt is memory-hard (resists GPU attacks)
    - HKDF gives computationally independent outputs per info string
    - The master key only ever enters HKDF as input keying material,
      so it never shows up in any output

Higher-level code (seed.py, password.py) builds on these functions and
never touches the primitives directly.
"""

import logging

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from .errors import InvalidParameterError

log = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

MASTER_KEY_SIZE = 32     # 256-bit master key

# scrypt parameters
# N = 2**log_n (CPU/memory cost), r = block size, p = parallelization
SCRYPT_SALT = b"1seed"
SCRYPT_LOG_N = 20        # production: ~1 GiB RAM, ~1 sec
SCRYPT_TEST_LOG_N = 12   # tests only: ~4 MiB RAM, ~10 ms
SCRYPT_R = 8
SCRYPT_P = 1
# scrypt needs 128 * r * N bytes; keep that within 64 bits (128 * 8 = 2**10)
SCRYPT_MAX_LOG_N = 63 - 10

# Derivation paths are "v1/{realm}/{purpose}"
VERSION = "v1"

# HKDF-Expand can produce at most 255 blocks of the hash output
HASH_SIZE = 32
MAX_DERIVE_LENGTH = 255 * HASH_SIZE

# Bytes in this range count as printable when classifying raw secrets
PRINTABLE_MIN = 32
PRINTABLE_MAX = 127


# =============================================================================
# Key Stretching
# =============================================================================

def check_scrypt_log_n(log_n: int) -> None:
    """
    Reject work factors scrypt cannot run with.

    N must be a power of two between 2 and 2**SCRYPT_MAX_LOG_N. Whether that much
    memory is available is only known when scrypt runs; see stretch().

    Raises:
        InvalidParameterError: If log_n is out of range
    """
    if isinstance(log_n, bool) or not isinstance(log_n, int):
        raise InvalidParameterError("scrypt log_n", log_n, "must be an integer")
    if log_n < 1 or log_n > SCRYPT_MAX_LOG_N:
        raise InvalidParameterError(
            "scrypt log_n", log_n, f"must be between 1 and {SCRYPT_MAX_LOG_N}"
        )


def stretch(passphrase: str, log_n: int = SCRYPT_LOG_N) -> bytes:
    """
    Stretch a passphrase into a 32-byte master key using scrypt.

    Why scrypt?
    - Memory-hard: Requires lots of RAM, expensive for attackers with GPUs
    - Slow on purpose: every guess costs the attacker the same second

    The salt is a fixed application constant. The same passphrase must
    give the same master key on every machine, so there is nothing to
    store next to it.

    Args:
        passphrase: Low-entropy secret (already trimmed)
        log_n: Work-factor exponent, N = 2**log_n

    Returns:
        32-byte master key

    Raises:
        InvalidParameterError: If log_n is outside scrypt's valid range
            or needs more memory than scrypt can allocate
    """
    check_scrypt_log_n(log_n)
    log.debug("stretching passphrase with scrypt (log_n=%d, r=%d, p=%d)",
              log_n, SCRYPT_R, SCRYPT_P)
    try:
        kdf = Scrypt(
            salt=SCRYPT_SALT,
            length=MASTER_KEY_SIZE,
            n=2 ** log_n,
            r=SCRYPT_R,
            p=SCRYPT_P,
        )
    except ValueError as e:
        raise InvalidParameterError("scrypt log_n", log_n, str(e)) from e
    try:
        return kdf.derive(passphrase.encode('utf-8'))
    except MemoryError as e:
        raise InvalidParameterError("scrypt log_n", log_n, str(e)) from e


# =============================================================================
# Raw Secret Classification
# =============================================================================

def is_binary_seed(data: bytes) -> bool:
    """
    Decide whether raw secret bytes are a binary seed or a passphrase.

    Binary means: at least 32 bytes AND at least one byte outside
    the printable range 32..127. Anything else is a passphrase.
    Any input matching this rule is treated as binary, whatever the
    user meant.
    """
    if len(data) < MASTER_KEY_SIZE:
        return False
    return any(b < PRINTABLE_MIN or b > PRINTABLE_MAX for b in data)


def decode_passphrase(data: bytes) -> str:
    """Decode passphrase bytes as UTF-8 (lossy) and trim whitespace."""
    return bytes(data).decode('utf-8', errors='replace').strip()


# =============================================================================
# Key Expansion (HKDF)
# =============================================================================

def derivation_path(realm: str, purpose: str) -> str:
    """Build the HKDF info string for a realm/purpose pair."""
    return f"{VERSION}/{realm}/{purpose}"


def check_derive_length(length: int) -> None:
    """
    Reject output lengths HKDF-SHA256 cannot produce.

    Raises:
        InvalidParameterError: If length is negative or above 8160 bytes
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidParameterError("length", length, "must be an integer")
    if length < 0:
        raise InvalidParameterError("length", length, "must not be negative")
    if length > MAX_DERIVE_LENGTH:
        raise InvalidParameterError(
            "length", length, f"exceeds HKDF-SHA256 limit of {MAX_DERIVE_LENGTH} bytes"
        )


def expand(master_key, info: str, length: int) -> bytes:
    """
    Expand the master key into `length` pseudorandom bytes with HKDF.

    Why no salt?
    - The master key already carries full entropy
    - 'info' provides domain separation (each path gives an independent key)

    Args:
        master_key: 32-byte master key (bytes or bytearray)
        info: Derivation path, see derivation_path()
        length: Number of output bytes (0..8160)

    Returns:
        Derived bytes
    """
    check_derive_length(length)
    if length == 0:
        return b""
    h = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=None,
        info=info.encode('utf-8'),
    )
    return h.derive(master_key)
