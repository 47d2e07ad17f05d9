"""Errors raised by passentry."""

from __future__ import annotations


class PassEntryError(Exception):
    """Base error for this package."""


class DecodeError(PassEntryError, ValueError):
    """Raised when an entry cannot be decoded."""

    kind = "decode"


class InvalidName(DecodeError):
    """Raised when the entry name is empty."""

    kind = "invalid_name"

    def __init__(self, message: str = "invalid name") -> None:
        super().__init__(message)


class InvalidData(DecodeError):
    """Raised when the entry content is empty or not valid UTF-8."""

    kind = "invalid_data"

    def __init__(self, message: str = "invalid data") -> None:
        super().__init__(message)


class StoreError(PassEntryError, RuntimeError):
    """Raised when the password store cannot be read."""


class ConfigError(PassEntryError):
    """Raised when passentry.toml is malformed."""
