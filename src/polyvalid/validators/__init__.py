"""Field validators and the canonical name, email and password rule sets."""

from polyvalid.validators.base import (
    FieldValidator,
    RuleCheck,
    ValidationRule,
    validation_rule,
)
from polyvalid.validators.email import EMAIL_VALIDATOR
from polyvalid.validators.name import NAME_VALIDATOR
from polyvalid.validators.password import PASSWORD_VALIDATOR
from polyvalid.validators.registry import (
    DEFAULT_FORMS,
    FieldRegistry,
    create_default_registry,
    registry,
)

__all__ = [
    "FieldValidator",
    "RuleCheck",
    "ValidationRule",
    "validation_rule",
    "EMAIL_VALIDATOR",
    "NAME_VALIDATOR",
    "PASSWORD_VALIDATOR",
    "DEFAULT_FORMS",
    "FieldRegistry",
    "create_default_registry",
    "registry",
]
