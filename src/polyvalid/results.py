"""Validation results.

``ValidationError`` is one failure for one field. ``ValidationErrorSet``
groups failures by field name; an empty set means validation passed.
``ErrorAggregator`` builds a set incrementally and may be shared between
worker threads.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator


@dataclass(frozen=True)
class ValidationError:
    """A single field failure.

    Attributes:
        code: Stable machine identifier, ``<field>.<check>``
        message: Locale-resolved human readable text
        value: The offending raw value
    """

    code: str
    message: str
    value: Any = None

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValueError("ValidationError code must not be blank")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "params": {"value": self.value},
        }


@dataclass(frozen=True)
class ValidationErrorSet:
    """Per-field validation errors from one validation call.

    Field order follows insertion but carries no meaning; compare and look
    up entries by field name.
    """

    _errors: tuple[tuple[str, tuple[ValidationError, ...]], ...] = field(default=())

    @classmethod
    def from_mapping(
        cls, errors: dict[str, Iterable[ValidationError]]
    ) -> "ValidationErrorSet":
        return cls(tuple((name, tuple(errs)) for name, errs in errors.items() if errs))

    @property
    def is_empty(self) -> bool:
        return not self._errors

    @property
    def success(self) -> bool:
        return self.is_empty

    def fields(self) -> list[str]:
        return [name for name, _ in self._errors]

    def get(self, field_name: str) -> tuple[ValidationError, ...]:
        """Errors recorded for a field (empty tuple when none)."""
        for name, errors in self._errors:
            if name == field_name:
                return errors
        return ()

    def items(self) -> Iterator[tuple[str, tuple[ValidationError, ...]]]:
        return iter(self._errors)

    def entries(self) -> Iterator[tuple[str, ValidationError]]:
        """Iterate over every (field, error) pair."""
        for name, errors in self._errors:
            for error in errors:
                yield name, error

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Client payload: ``{field: [{code, message, params: {value}}]}``."""
        return {name: [e.to_dict() for e in errors] for name, errors in self._errors}

    def to_response(self, message: str) -> dict[str, Any]:
        """Wrap the errors in the API error envelope."""
        return {"message": message, "error": {"details": self.to_dict()}}

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def __contains__(self, field_name: str) -> bool:
        return any(name == field_name for name, _ in self._errors)

    def __getitem__(self, field_name: str) -> tuple[ValidationError, ...]:
        errors = self.get(field_name)
        if not errors:
            raise KeyError(field_name)
        return errors

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields())

    def __len__(self) -> int:
        return len(self._errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationErrorSet):
            return NotImplemented
        return dict(self._errors) == dict(other._errors)

    def __hash__(self) -> int:
        return hash(frozenset(self._errors))


class ErrorAggregator:
    """Thread-safe builder for a ValidationErrorSet.

    There is no deduplication across fields. Adding the same error to a
    field twice keeps both entries.

    Example:
        aggregator = ErrorAggregator()
        aggregator.add("email", ValidationError("email.invalid", "...", "a@b"))
        result = aggregator.build()
    """

    def __init__(self) -> None:
        self._errors: dict[str, list[ValidationError]] = {}
        self._lock = threading.Lock()

    def add(self, field_name: str, error: ValidationError | None) -> None:
        """Record an error for a field; None is ignored."""
        if error is None:
            return
        with self._lock:
            self._errors.setdefault(field_name, []).append(error)

    def merge(self, other: "ValidationErrorSet | ErrorAggregator") -> None:
        """Add every entry of another result or aggregator."""
        source = other.build() if isinstance(other, ErrorAggregator) else other
        for name, error in source.entries():
            self.add(name, error)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._errors

    def build(self) -> ValidationErrorSet:
        with self._lock:
            return ValidationErrorSet.from_mapping(self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)
