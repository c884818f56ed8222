"""
oneseed - Seed Module

This file handles:
- Turning raw secret bytes into a master key (stretch or ingest)
- Owning the master key for the lifetime of one derivation session
- Deriving material along "v1/{realm}/{purpose}" paths
- Wiping the master key when the session ends

Lifecycle:
    with derive_master_key(secret_bytes, config) as seed:
        key = seed.derive_32("work", "ssh")
    # master key bytes are zero here, even if the block raised
"""

import logging
from typing import Optional

from . import crypto
from .config import Config
from .errors import InvalidParameterError, SeedWipedError

log = logging.getLogger(__name__)


def _zero(buf: bytearray) -> None:
    """Overwrite a mutable buffer with zeros in place."""
    buf[:] = bytes(len(buf))


class Seed:
    """
    Derivation session holding one 32-byte master key.

    Usage:
        # From a passphrase (slow: runs scrypt)
        seed = Seed.from_passphrase("correct horse battery staple")

        # From raw bytes read by the caller (file, prompt, keyring)
        seed = Seed.from_secret_bytes(data)

        # Derive
        age_secret = seed.derive_32("default", "age")
        blob = seed.derive("default", "raw/backup", 64)

        # Wipe when done (or use `with`)
        seed.wipe()
    """

    __slots__ = ('_master', '_wiped')

    def __init__(self, master: bytearray):
        """
        Take ownership of a 32-byte master key buffer.

        The buffer is adopted, not copied: the Seed zeroes it on wipe().
        Use the from_* constructors instead of calling this directly.

        Raises:
            InvalidParameterError: If master is not a 32-byte bytearray
        """
        if not isinstance(master, bytearray):
            raise InvalidParameterError(
                "master key type", type(master).__name__, "must be a bytearray so it can be wiped"
            )
        if len(master) != crypto.MASTER_KEY_SIZE:
            raise InvalidParameterError(
                "master key length", len(master), f"must be {crypto.MASTER_KEY_SIZE} bytes"
            )
        self._master = master
        self._wiped = False

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def from_passphrase(cls, passphrase: str, config: Optional[Config] = None) -> "Seed":
        """
        Stretch a passphrase into a master key with scrypt.

        Args:
            passphrase: User secret (used as given, no trimming here)
            config: Selects the scrypt tier; production tier when omitted

        Raises:
            InvalidParameterError: If the configured work factor is invalid
        """
        log_n = (config or Config()).scrypt_log_n
        master = bytearray(crypto.stretch(passphrase, log_n))
        try:
            return cls(master)
        except Exception:
            _zero(master)
            raise

    @classmethod
    def from_bytes(cls, data: bytes) -> "Seed":
        """
        Use already-high-entropy bytes directly (first 32 bytes).

        Raises:
            InvalidParameterError: If fewer than 32 bytes are given
        """
        if len(data) < crypto.MASTER_KEY_SIZE:
            raise InvalidParameterError(
                "seed length", len(data), f"need at least {crypto.MASTER_KEY_SIZE} bytes"
            )
        return cls(bytearray(data[:crypto.MASTER_KEY_SIZE]))

    @classmethod
    def from_secret_bytes(cls, data: bytes, config: Optional[Config] = None) -> "Seed":
        """
        Build a seed from raw secret bytes of unknown kind.

        Binary seeds (see crypto.is_binary_seed) are used directly;
        everything else is decoded, trimmed and stretched.
        """
        if crypto.is_binary_seed(data):
            log.debug("secret classified as binary seed (%d bytes)", len(data))
            return cls.from_bytes(data)
        log.debug("secret classified as passphrase")
        return cls.from_passphrase(crypto.decode_passphrase(data), config)

    # =========================================================================
    # DERIVATION
    # =========================================================================

    def derive(self, realm: str, purpose: str, length: int) -> bytes:
        """
        Derive `length` bytes for a realm/purpose pair.

        Recomputed on every call; identical arguments give identical bytes.

        Raises:
            InvalidParameterError: If length exceeds the HKDF ceiling
            SeedWipedError: If the seed has been wiped
        """
        self._require_live()
        path = crypto.derivation_path(realm, purpose)
        log.debug("deriving %d bytes at %s", length, path)
        return crypto.expand(self._master, path, length)

    def derive_32(self, realm: str, purpose: str) -> bytes:
        """Derive a 32-byte key for a realm/purpose pair."""
        return self.derive(realm, purpose, 32)

    def export_master_key(self) -> bytes:
        """Copy of the master key, for backup only (see recovery.py)."""
        self._require_live()
        return bytes(self._master)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        """Zero the master key. Safe to call more than once."""
        if self._wiped:
            return
        _zero(self._master)
        self._wiped = True

    def __enter__(self) -> "Seed":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __del__(self):
        # __init__ may have failed before the slots were set
        if hasattr(self, '_wiped'):
            self.wipe()

    def __repr__(self) -> str:
        return f"<Seed wiped={self._wiped}>"

    def _require_live(self) -> None:
        if self._wiped:
            raise SeedWipedError("seed has been wiped; create a new one")


def derive_master_key(secret_bytes: bytes, config: Optional[Config] = None) -> Seed:
    """
    Entry point for callers holding raw secret bytes.

    Args:
        secret_bytes: Raw bytes from a file, prompt or secret store
        config: Explicit settings; production scrypt tier when omitted

    Returns:
        Seed owning the master key (use it in a `with` block)
    """
    return Seed.from_secret_bytes(secret_bytes, config)
