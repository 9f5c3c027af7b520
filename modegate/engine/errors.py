"""Exception hierarchy for the mode gate.

Classification itself never raises: a blocked command is a verdict,
not an error. These exceptions cover the caller boundary only.
"""
from __future__ import annotations


class ModeGateError(Exception):
    """Base exception for all mode gate errors."""


class InvalidModeError(ModeGateError, ValueError):
    """A mode name outside the closed set was supplied."""
    def __init__(self, value: object, allowed: list[str]):
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Unknown mode {value!r}. Expected one of: {', '.join(allowed)}"
        )


class ConfigError(ModeGateError):
    """Configuration could not be interpreted."""
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source}: {reason}")
