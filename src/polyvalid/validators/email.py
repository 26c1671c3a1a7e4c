"""Email field rules.

The structural rules each report one specific problem. The general grammar
check from ``email_validator`` runs only when every structural rule passed,
as a last catch-all.

The domain is the text between the first ``@`` and the next ``@`` (or the
end of the value), so ``user@@example.com`` has an empty domain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email

from polyvalid.validators.base import FieldValidator, validation_rule

if TYPE_CHECKING:
    from polyvalid.i18n.resolver import MessageResolver

MIN_EMAIL_LENGTH = 5
MAX_EMAIL_LENGTH = 254
MIN_DOMAIN_SEGMENT_LENGTH = 2
MIN_TLD_LENGTH = 2

# Stands in for reserved names such as "local" or "test" in the grammar check.
NEUTRAL_TLD = "com"


def get_domain(email: str) -> str | None:
    """Domain part of an address, or None when there is no ``@``."""
    parts = email.split("@")
    return parts[1] if len(parts) > 1 else None


@validation_rule
def has_min_length(email: str, messages: MessageResolver) -> str | None:
    if len(email) < MIN_EMAIL_LENGTH:
        return messages.validation(
            "email.too_short",
            f"Email must be at least {MIN_EMAIL_LENGTH} characters",
        )
    return None


@validation_rule
def has_max_length(email: str, messages: MessageResolver) -> str | None:
    if len(email) > MAX_EMAIL_LENGTH:
        return messages.validation(
            "email.too_long",
            f"Email must be less than {MAX_EMAIL_LENGTH} characters",
        )
    return None


@validation_rule
def has_at_and_dot(email: str, messages: MessageResolver) -> str | None:
    # A missing '@' takes precedence over a missing '.'.
    if "@" not in email:
        return messages.validation("email.missing_at", "Email must contain '@' and '.'")
    if "." not in email:
        return messages.validation("email.missing_dot", "Email must contain '@' and '.'")
    return None


@validation_rule
def is_at_before_dot(email: str, messages: MessageResolver) -> str | None:
    at_index = email.find("@")
    dot_index = email.rfind(".")
    if at_index != -1 and dot_index != -1 and at_index >= dot_index:
        return messages.validation(
            "email.at_before_dot",
            "The '@' must come before the last '.'",
        )
    return None


@validation_rule
def has_no_invalid_chars(email: str, messages: MessageResolver) -> str | None:
    if any(c == " " or not c.isascii() for c in email):
        return messages.validation(
            "email.invalid_chars",
            "Email must not contain spaces or non-ASCII characters",
        )
    return None


@validation_rule
def has_no_consecutive_dots(email: str, messages: MessageResolver) -> str | None:
    if ".." in email:
        return messages.validation(
            "email.consecutive_dots",
            "Email must not contain consecutive dots",
        )
    return None


@validation_rule
def has_no_leading_or_trailing_dot(email: str, messages: MessageResolver) -> str | None:
    if email.startswith(".") or email.endswith("."):
        return messages.validation(
            "email.starts_or_ends_with_dot",
            "Email must not start or end with a dot",
        )
    return None


@validation_rule
def domain_starts_without_dot(email: str, messages: MessageResolver) -> str | None:
    domain = get_domain(email)
    if domain is not None and domain.startswith("."):
        return messages.validation(
            "email.domain_starts_with_dot",
            "The domain part must not start with a dot",
        )
    return None


@validation_rule
def domain_exists(email: str, messages: MessageResolver) -> str | None:
    if get_domain(email) is None:
        return messages.validation(
            "email.missing_domain",
            "Email must have a domain part after '@'",
        )
    return None


@validation_rule
def is_structure_valid_domain(email: str, messages: MessageResolver) -> str | None:
    domain = get_domain(email)
    if domain is not None and (not domain or " " in domain or "." not in domain):
        return messages.validation(
            "email.invalid_domain",
            "The domain part of the email is invalid",
        )
    return None


@validation_rule
def has_valid_domain_segment_length(email: str, messages: MessageResolver) -> str | None:
    domain = get_domain(email)
    if domain is None:
        return None
    first_dot = domain.find(".")
    if first_dot != -1 and first_dot < MIN_DOMAIN_SEGMENT_LENGTH:
        return messages.validation(
            "email.invalid_domain_length",
            f"The domain part (after '@') must have at least "
            f"{MIN_DOMAIN_SEGMENT_LENGTH} characters before the first dot",
        )
    return None


@validation_rule
def has_valid_tld_format(email: str, messages: MessageResolver) -> str | None:
    domain = get_domain(email)
    if domain is None or "." not in domain:
        return None
    tld = domain[domain.rfind(".") + 1:]
    if len(tld) < MIN_TLD_LENGTH or not tld.isalpha():
        return messages.validation(
            "email.invalid_tld",
            f"The TLD (after the last '.') must be at least "
            f"{MIN_TLD_LENGTH} characters long and alphabetic",
        )
    return None


def _grammar_only(email: str) -> str:
    """Replace a special-use domain suffix so only the address grammar is judged.

    email_validator rejects reserved names such as ``printer.local`` or
    ``company.test`` as a policy decision, not a syntax error.
    """
    local, at, domain = email.rpartition("@")
    lowered = domain.lower()
    for name in SPECIAL_USE_DOMAIN_NAMES:
        if lowered == name or lowered.endswith("." + name):
            return f"{local}{at}{domain[: len(domain) - len(name)]}{NEUTRAL_TLD}"
    return email


@validation_rule
def is_overall_format_valid(email: str, messages: MessageResolver) -> str | None:
    try:
        validate_email(_grammar_only(email), check_deliverability=False)
    except EmailNotValidError:
        return messages.validation("email.invalid", "Invalid email format")
    return None


EMAIL_VALIDATOR = FieldValidator(
    field="email",
    code="email.invalid",
    rules=(
        has_min_length,
        has_max_length,
        has_at_and_dot,
        is_at_before_dot,
        has_no_invalid_chars,
        has_no_consecutive_dots,
        has_no_leading_or_trailing_dot,
        domain_starts_without_dot,
        domain_exists,
        is_structure_valid_domain,
        has_valid_domain_segment_length,
        has_valid_tld_format,
    ),
    catch_all=(is_overall_format_valid,),
)
