"""Exceptions raised by polyvalid.

Validation failures and catalog problems are never raised; they are
reported through ``ValidationErrorSet`` or degrade to default messages.
The exceptions here signal programmer or configuration mistakes and are
raised at construction time.
"""

from __future__ import annotations


class PolyvalidError(Exception):
    """Base class for polyvalid errors."""


class ConfigError(PolyvalidError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration for '{key}' ({value!r}): {reason}")


class UnknownFieldError(PolyvalidError, KeyError):
    """Raised when no validator is registered for a field name."""

    def __init__(self, field_name: str, available: list[str]):
        self.field_name = field_name
        self.available = available
        super().__init__(
            f"No validator registered for field '{field_name}'. "
            f"Available: {', '.join(available)}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownFormError(PolyvalidError, KeyError):
    """Raised when no field list is registered for a form name."""

    def __init__(self, form_name: str, available: list[str]):
        self.form_name = form_name
        self.available = available
        super().__init__(
            f"Unknown form '{form_name}'. Available: {', '.join(available)}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class BatchInputError(PolyvalidError, ValueError):
    """Raised when batch input cannot be validated as a form."""
