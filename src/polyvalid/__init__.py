"""polyvalid - Multi-locale field validation with localized error messages.

Example:
    from polyvalid import EngineConfig, build_engine

    engine = build_engine(EngineConfig.from_env())
    errors = engine.validate_form(
        "register",
        {"name": "Ada Lovelace", "email": "ada@example.org", "password": "password"},
        accept_language="id-ID,en;q=0.8",
    )
    errors.to_dict()
    # {"password": [{"code": "password.invalid", "message": "...", "params": {...}}]}
"""

from polyvalid.config import EngineConfig
from polyvalid.engine import ValidationEngine, build_engine
from polyvalid.exceptions import (
    BatchInputError,
    ConfigError,
    PolyvalidError,
    UnknownFieldError,
    UnknownFormError,
)
from polyvalid.i18n import (
    CatalogManager,
    LocaleSelector,
    MessageCatalog,
    MessageResolver,
    select_locale,
)
from polyvalid.pipeline import ValidationPipeline
from polyvalid.results import ErrorAggregator, ValidationError, ValidationErrorSet
from polyvalid.types import Locale, Namespace
from polyvalid.validators import FieldValidator, ValidationRule, validation_rule

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "ValidationEngine",
    "build_engine",
    "BatchInputError",
    "ConfigError",
    "PolyvalidError",
    "UnknownFieldError",
    "UnknownFormError",
    "CatalogManager",
    "LocaleSelector",
    "MessageCatalog",
    "MessageResolver",
    "select_locale",
    "ValidationPipeline",
    "ErrorAggregator",
    "ValidationError",
    "ValidationErrorSet",
    "Locale",
    "Namespace",
    "FieldValidator",
    "ValidationRule",
    "validation_rule",
]
