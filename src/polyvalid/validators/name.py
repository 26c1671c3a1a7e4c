"""Name field rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from polyvalid.validators.base import FieldValidator, validation_rule

if TYPE_CHECKING:
    from polyvalid.i18n.resolver import MessageResolver

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


@validation_rule
def is_not_empty(name: str, messages: MessageResolver) -> str | None:
    if not name.strip():
        return messages.validation("name.empty", "Name must not be empty")
    return None


@validation_rule
def has_min_length(name: str, messages: MessageResolver) -> str | None:
    if len(name) < MIN_NAME_LENGTH:
        return messages.validation(
            "name.too_short",
            f"Name must be at least {MIN_NAME_LENGTH} characters long",
        )
    return None


@validation_rule
def has_max_length(name: str, messages: MessageResolver) -> str | None:
    if len(name) > MAX_NAME_LENGTH:
        return messages.validation(
            "name.too_long",
            f"Name must be less than {MAX_NAME_LENGTH} characters",
        )
    return None


@validation_rule
def has_valid_chars(name: str, messages: MessageResolver) -> str | None:
    if not all(c.isalpha() or c.isspace() for c in name):
        return messages.validation(
            "name.invalid_chars",
            "Name can only contain letters and spaces",
        )
    return None


NAME_VALIDATOR = FieldValidator(
    field="name",
    code="name.invalid",
    rules=(is_not_empty, has_min_length, has_max_length, has_valid_chars),
)
