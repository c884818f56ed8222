"""
oneseed - Configuration

Settings are passed explicitly to the functions that need them. Nothing
here reads environment variables or files; the reduced scrypt tier is only
reachable by constructing Config(fast_kdf=True).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from . import crypto

DEFAULT_REALM = "default"


@dataclass
class Config:
    realm: str = DEFAULT_REALM
    realms: List[str] = field(default_factory=list)
    # Cheap scrypt tier for test suites. Never enable in production.
    fast_kdf: bool = False

    @property
    def scrypt_log_n(self) -> int:
        return crypto.SCRYPT_TEST_LOG_N if self.fast_kdf else crypto.SCRYPT_LOG_N

    def resolve_realm(self, explicit: Optional[str] = None) -> str:
        """Pick the realm to derive in: explicit argument first, then configured."""
        if explicit:
            return explicit
        return self.realm

    def add_realm(self, name: str) -> None:
        if name not in self.realms:
            self.realms.append(name)
            self.realms.sort()

    def remove_realm(self, name: str) -> None:
        self.realms = [r for r in self.realms if r != name]
