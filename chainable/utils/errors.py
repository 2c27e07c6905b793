"""Custom exception hierarchy for chain computations."""

from __future__ import annotations

from typing import Any


class ChainError(Exception):
    """Base chainable error with a stable machine-readable code."""

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Serialize the error in the standard error shape."""
        return {"error": self.message, "code": self.code}


class InvalidTimestampError(ChainError):
    """Raised when a raw timestamp cannot be turned into a calendar date."""

    def __init__(self, value: Any, column: str | None = None) -> None:
        self.value = value
        self.column = column
        where = f" in column {column!r}" if column else ""
        super().__init__(
            message=f"Invalid timestamp{where}: {value!r}",
            code="INVALID_TIMESTAMP",
        )


class UnknownAssociationError(ChainError):
    """Raised when a date source has no records collection by that name."""

    def __init__(self, association: str) -> None:
        self.association = association
        super().__init__(
            message=f"Unknown association: {association}",
            code="UNKNOWN_ASSOCIATION",
        )


class UnknownColumnError(ChainError):
    """Raised when a record does not carry the requested column."""

    def __init__(self, column: str, association: str | None = None) -> None:
        self.column = column
        self.association = association
        where = f" on {association}" if association else ""
        super().__init__(message=f"Unknown column{where}: {column}", code="UNKNOWN_COLUMN")


class DataSourceError(ChainError):
    """Raised when the backing store fails to return records."""

    def __init__(self, reason: str) -> None:
        super().__init__(message=reason, code="DATA_SOURCE_ERROR")


class ConfigurationError(ChainError):
    """Raised when a required setting is missing or invalid."""

    def __init__(self, reason: str) -> None:
        super().__init__(message=reason, code="CONFIGURATION_ERROR")
