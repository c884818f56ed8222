"""
oneseed - Password Derivation

Site passwords are derived, not stored:

    pw/{site}/{counter}      → 2 * length bytes → rejection sampling → password
    pw/{site}/{counter}/fix  → 8 bytes → fill in any missing character class

Bumping the counter is the only way to rotate a site's password.

Character sets (no look-alikes):
- Uppercase: no I, O (24)
- Lowercase: no i, l, o (23)
- Digits: no 0, 1 (8)
- Symbols: !@#$%^&* by default (8, optional)
"""

import logging

from .errors import InvalidParameterError
from .seed import Seed

log = logging.getLogger(__name__)

UPPER = "ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWER = "abcdefghjkmnpqrstuvwxyz"
DIGIT = "23456789"
SYMBOL = "!@#$%^&*"

MIN_LENGTH = 4
MAX_LENGTH = 128
MAX_COUNTER = 2 ** 32 - 1

FIX_BYTES = 8


def derive_password(
    seed: Seed,
    realm: str,
    site: str,
    counter: int = 1,
    length: int = 16,
    use_symbols: bool = True,
    symbols: str = ""
) -> str:
    """
    Derive the password for a site.

    Args:
        seed: Live seed holding the master key
        realm: Namespace the password lives in
        site: Site identifier, e.g. "github.com"
        counter: Rotation counter (0..2**32-1)
        length: Password length (4..128)
        use_symbols: Include a symbol class?
        symbols: Custom symbol set; empty means the default set

    Returns:
        Password string of exactly `length` characters

    Raises:
        InvalidParameterError: If length or counter is out of range
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidParameterError("password length", length, "must be an integer")
    if length < MIN_LENGTH:
        raise InvalidParameterError("password length", length, f"must be at least {MIN_LENGTH}")
    if length > MAX_LENGTH:
        raise InvalidParameterError("password length", length, f"must be at most {MAX_LENGTH}")
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidParameterError("counter", counter, "must be an integer")
    if counter < 0 or counter > MAX_COUNTER:
        raise InvalidParameterError("counter", counter, f"must be between 0 and {MAX_COUNTER}")

    symbol_set = (symbols or SYMBOL) if use_symbols else ""
    charset = UPPER + LOWER + DIGIT + symbol_set

    purpose = f"pw/{site}/{counter}"
    raw = bytearray()
    fix = bytearray()
    try:
        raw = bytearray(seed.derive(realm, purpose, length * 2))
        fix = bytearray(seed.derive(realm, f"{purpose}/fix", FIX_BYTES))
        password = _sample(raw, charset, length)
        requirements = [UPPER, LOWER, DIGIT]
        if use_symbols:
            requirements.append(symbol_set)
        _ensure_requirements(password, fix, requirements)
        return "".join(password)
    finally:
        raw[:] = bytes(len(raw))
        fix[:] = bytes(len(fix))


def _sample(raw: bytearray, charset: str, length: int) -> list:
    """
    Map random bytes onto charset without modulo bias.

    Bytes at or above the largest multiple of len(charset) are skipped.
    If too few survive (rare with 2x oversampling), remaining positions
    use plain modulo of raw[position].
    """
    size = len(charset)
    max_valid = 256 - (256 % size)

    password = []
    for b in raw:
        if len(password) == length:
            break
        if b < max_valid:
            password.append(charset[b % size])

    if len(password) < length:
        log.debug("rejection sampling short by %d; using modulo fallback",
                  length - len(password))
    while len(password) < length:
        idx = len(password)
        password.append(charset[raw[idx] % size])

    return password


def _ensure_requirements(password: list, fix: bytearray, requirements: list) -> None:
    """
    Make sure each character class appears at least once.

    Classes are checked in order; a missing class overwrites one position
    chosen by the fix bytes. A later fix may land on an earlier fix's
    position. Nothing is re-checked afterwards.
    """
    repaired = 0
    for i, req in enumerate(requirements):
        if any(c in req for c in password):
            continue
        pos = fix[i * 2] % len(password)
        char_idx = fix[i * 2 + 1] % len(req)
        password[pos] = req[char_idx]
        repaired += 1

    if repaired:
        log.debug("password class repair applied %d fix(es)", repaired)
