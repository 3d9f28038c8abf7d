"""Project error hierarchy."""

from __future__ import annotations


class HeaderEvalError(Exception):
    """Base error."""


class ConfigurationError(HeaderEvalError):
    """Raised when a filter configuration is missing fields or carries invalid values."""

    def __init__(self, field: str, value: object, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid/Empty {field}: '{value}'")
