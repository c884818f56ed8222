"""
oneseed - Deterministic Keys from a Single Seed

One master secret, any number of independent keys and passwords.

Key Features:
- Deterministic: same seed + realm + purpose always gives the same bytes
- Strong crypto: scrypt (memory-hard) + HKDF-SHA256
- Realms: independent key spaces from one seed ("work", "personal", ...)
- Passwords: site passwords with guaranteed character classes, rotated by counter
- Recovery: k-of-n Shamir backup shares of the master key

Components:
- crypto.py: scrypt stretching, secret classification, HKDF expansion
- seed.py: Seed session object (owns and wipes the master key)
- password.py: Site password derivation
- derive.py: Raw bytes, mnemonic entropy, age/ssh/sign key material
- recovery.py: Shamir Secret Sharing (SLIP-39) backup of the master key
- config.py: Explicit settings (realm, scrypt tier)

Usage:
    from oneseed import Config, derive_master_key, derive_password

    with derive_master_key(b"my passphrase", Config()) as seed:
        pw = derive_password(seed, "default", "github.com")
"""

from .config import Config
from .errors import InputFormatError, InvalidParameterError, OneSeedError, SeedWipedError
from .password import derive_password
from .seed import Seed, derive_master_key

__version__ = "0.1.0"
__author__ = "oneseed Team"

__all__ = [
    "Config",
    "InputFormatError",
    "InvalidParameterError",
    "OneSeedError",
    "Seed",
    "SeedWipedError",
    "derive_master_key",
    "derive_password",
]
