"""
oneseed - Error Types

Every failure the core can report is one of these. Parameter errors carry
the offending name and value so callers can show them without parsing the
message.
"""


class OneSeedError(Exception):
    """Base exception for all oneseed errors."""
    pass


class InvalidParameterError(OneSeedError, ValueError):
    """Raised when a numeric or structural parameter is out of range."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"invalid {name} {value!r}: {reason}")


class InputFormatError(OneSeedError, ValueError):
    """Raised when secret-source input cannot be parsed."""
    pass


class SeedWipedError(OneSeedError, RuntimeError):
    """Raised when a wiped seed is used for derivation."""
    pass
