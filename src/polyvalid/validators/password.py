"""Password field rules.

Character class checks are ASCII-only for letters and digits; a special
character is anything that is not alphanumeric.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from polyvalid.validators.base import FieldValidator, validation_rule

if TYPE_CHECKING:
    from polyvalid.i18n.resolver import MessageResolver

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128


@validation_rule
def has_min_length(password: str, messages: MessageResolver) -> str | None:
    if len(password) < MIN_PASSWORD_LENGTH:
        return messages.validation(
            "password.too_short",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    return None


@validation_rule
def has_max_length(password: str, messages: MessageResolver) -> str | None:
    if len(password) > MAX_PASSWORD_LENGTH:
        return messages.validation(
            "password.too_long",
            f"Password must be no more than {MAX_PASSWORD_LENGTH} characters long",
        )
    return None


@validation_rule
def has_no_space(password: str, messages: MessageResolver) -> str | None:
    if " " in password:
        return messages.validation(
            "password.contains_space",
            "Password must not contain spaces",
        )
    return None


@validation_rule
def has_uppercase(password: str, messages: MessageResolver) -> str | None:
    if not any(c in string.ascii_uppercase for c in password):
        return messages.validation(
            "password.missing_uppercase",
            "Password must contain at least one uppercase letter",
        )
    return None


@validation_rule
def has_lowercase(password: str, messages: MessageResolver) -> str | None:
    if not any(c in string.ascii_lowercase for c in password):
        return messages.validation(
            "password.missing_lowercase",
            "Password must contain at least one lowercase letter",
        )
    return None


@validation_rule
def has_digit(password: str, messages: MessageResolver) -> str | None:
    if not any(c in string.digits for c in password):
        return messages.validation(
            "password.missing_digit",
            "Password must contain at least one digit",
        )
    return None


@validation_rule
def has_special_char(password: str, messages: MessageResolver) -> str | None:
    if all(c.isalnum() for c in password):
        return messages.validation(
            "password.missing_special_char",
            "Password must contain at least one special character",
        )
    return None


PASSWORD_VALIDATOR = FieldValidator(
    field="password",
    code="password.invalid",
    rules=(
        has_min_length,
        has_max_length,
        has_no_space,
        has_uppercase,
        has_lowercase,
        has_digit,
        has_special_char,
    ),
)
