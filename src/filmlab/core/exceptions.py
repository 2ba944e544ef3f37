"""
Exceptions for FilmLab.

Hierarchy:
- FilmLabError (base)
  - InvalidInputError
  - ReferenceDataError

A missing development time is not an error: lookups return None for it.
"""

from typing import Any


class FilmLabError(Exception):
    """Base exception for FilmLab errors.

    Attributes:
        details: Additional error details.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"Details: {details_str}")
        return " | ".join(parts)


class InvalidInputError(FilmLabError, ValueError):
    """Raised when user supplied calculator input is malformed or out of range.

    Attributes:
        field: Name of the offending input.
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
            details.setdefault("value", value)
        super().__init__(message, details=details)
        self.field = field
        self.value = value


class ReferenceDataError(FilmLabError):
    """Raised when reference data cannot be imported or is inconsistent.

    Attributes:
        source: File or table the problem was found in.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if source is not None:
            details.setdefault("source", source)
        super().__init__(message, details=details)
        self.source = source
