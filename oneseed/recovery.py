"""
oneseed - Recovery Module (Shamir Secret Sharing)

Backs up the master key itself as k-of-n SLIP-39 shares:
- Split the 32-byte master key into n mnemonic shares
- Any k shares rebuild the exact same master key
- Fewer than k shares reveal NOTHING

Use case: the passphrase is forgotten, or the binary seed file is lost.
Every derived key comes back once the master key does.
"""

from typing import Iterable, List

from shamir_mnemonic import MnemonicError, shamir

from .crypto import MASTER_KEY_SIZE
from .errors import InputFormatError, InvalidParameterError
from .seed import Seed


def generate_recovery_shares(seed: Seed, k: int, n: int) -> List[str]:
    """
    Split the master key into n shares (need k to recover).

    Args:
        seed: Live seed whose master key is backed up
        k: Threshold (minimum shares needed)
        n: Total number of shares to create

    Returns:
        List of n mnemonic shares (space-separated words)

    Raises:
        InvalidParameterError: If k/n are out of range
    """
    if k > n:
        raise InvalidParameterError("k", k, f"cannot be greater than n ({n})")

    if k < 2:
        raise InvalidParameterError("k", k, "must be at least 2")

    if n > 16:
        raise InvalidParameterError("n", n, "cannot exceed 16 (SLIP-39 limit)")

    # One group with k-of-n threshold
    groups = shamir.generate_mnemonics(
        group_threshold=1,
        groups=[(k, n)],
        master_secret=seed.export_master_key(),
    )
    return groups[0]


def combine_recovery_shares(shares: Iterable[str]) -> Seed:
    """
    Rebuild the master key from at least k shares.

    Raises:
        InputFormatError: If shares are malformed, mismatched or too few
    """
    shares = [s.strip() for s in shares if s and s.strip()]
    if not shares:
        raise InputFormatError("no recovery shares given")
    try:
        recovered = shamir.combine_mnemonics(shares)
    except MnemonicError as e:
        raise InputFormatError(f"failed to combine shares: {e}") from e
    if len(recovered) != MASTER_KEY_SIZE:
        raise InputFormatError(
            f"shares hold a {len(recovered)}-byte secret, not a {MASTER_KEY_SIZE}-byte master key"
        )
    return Seed.from_bytes(recovered)


def format_recovery_kit(shares: List[str], k: int) -> str:
    """
    Format recovery shares for printing on paper.

    Args:
        shares: Shares from generate_recovery_shares()
        k: Threshold (how many shares needed)
    """
    output = []
    output.append("=" * 70)
    output.append("oneseed RECOVERY KIT")
    output.append("=" * 70)
    output.append(f"\nThreshold: Need {k} of {len(shares)} shares to recover")
    output.append("\nIMPORTANT:")
    output.append("- Store shares in separate secure locations")
    output.append(f"- Any {k} shares rebuild your master seed and every derived key")
    output.append("- NEVER store all shares together!\n")
    output.append("=" * 70)

    for i, share in enumerate(shares, 1):
        output.append(f"\n\nSHARE {i} of {len(shares)}")
        output.append("-" * 70)
        output.append(share)
        output.append("\n" + "-" * 70)

    return "\n".join(output)
