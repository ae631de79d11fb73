from __future__ import annotations


class ChartCheckError(Exception):
    """Base class for chartcheck errors."""


class DecodeError(ChartCheckError):
    """Raised when an input document cannot be read or does not have the expected shape."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(ChartCheckError):
    """Raised when a path override is unusable."""
