"""Field and form registry.

Maps field names to their ``FieldValidator`` and form names (the features
consuming the engine) to the ordered fields they validate.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from polyvalid.exceptions import UnknownFieldError, UnknownFormError
from polyvalid.validators.base import FieldValidator
from polyvalid.validators.email import EMAIL_VALIDATOR
from polyvalid.validators.name import NAME_VALIDATOR
from polyvalid.validators.password import PASSWORD_VALIDATOR


DEFAULT_FORMS: Mapping[str, tuple[str, ...]] = {
    "register": ("name", "email", "password"),
    "login": ("email", "password"),
}


class FieldRegistry:
    """Lookup table of field validators and form definitions."""

    def __init__(
        self,
        validators: Iterable[FieldValidator] = (),
        forms: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._validators: dict[str, FieldValidator] = {}
        self._forms: dict[str, tuple[str, ...]] = {}
        for validator in validators:
            self.register(validator)
        for form_name, fields in (forms or {}).items():
            self.register_form(form_name, fields)

    def register(self, validator: FieldValidator) -> FieldValidator:
        """Register a field validator, replacing any previous one."""
        self._validators[validator.field] = validator
        return validator

    def register_form(self, form_name: str, fields: Iterable[str]) -> None:
        """Register the ordered fields a form validates.

        Raises:
            UnknownFieldError: If a field has no registered validator.
        """
        field_names = tuple(fields)
        for field_name in field_names:
            self.get(field_name)
        self._forms[form_name] = field_names

    def get(self, field_name: str) -> FieldValidator:
        """Get the validator for a field."""
        if field_name not in self._validators:
            raise UnknownFieldError(field_name, sorted(self._validators))
        return self._validators[field_name]

    def form(self, form_name: str) -> tuple[FieldValidator, ...]:
        """Get the validators of a form, in declaration order."""
        if form_name not in self._forms:
            raise UnknownFormError(form_name, sorted(self._forms))
        return tuple(self._validators[name] for name in self._forms[form_name])

    def form_fields(self, form_name: str) -> tuple[str, ...]:
        return tuple(v.field for v in self.form(form_name))

    def list_fields(self) -> list[str]:
        return sorted(self._validators)

    def list_forms(self) -> list[str]:
        return sorted(self._forms)

    def __iter__(self) -> Iterator[tuple[str, FieldValidator]]:
        return iter(self._validators.items())

    def __contains__(self, field_name: str) -> bool:
        return field_name in self._validators

    def __len__(self) -> int:
        return len(self._validators)


def create_default_registry() -> FieldRegistry:
    """Registry with the name, email and password fields and the
    ``register`` and ``login`` forms."""
    return FieldRegistry(
        validators=(NAME_VALIDATOR, EMAIL_VALIDATOR, PASSWORD_VALIDATOR),
        forms=DEFAULT_FORMS,
    )


registry = create_default_registry()
