"""Engine wiring.

``ValidationEngine`` ties the configured catalogs, locale selection and the
pipeline together for callers that start from a raw language preference.

Example:
    engine = build_engine(EngineConfig.from_env())

    errors = engine.validate_form(
        "login",
        {"email": "user@example.org", "password": "password"},
        accept_language="de-DE,en;q=0.5",
    )
    if not errors.is_empty:
        body = errors.to_response(engine.resolver("de").auth(
            "login.invalid_credentials", "Invalid login credentials",
        ))
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from polyvalid.config import EngineConfig
from polyvalid.i18n.loader import CatalogManager
from polyvalid.i18n.locale import LocaleSelector
from polyvalid.i18n.resolver import MessageResolver
from polyvalid.pipeline import FieldInput, ValidationPipeline
from polyvalid.results import ValidationError, ValidationErrorSet
from polyvalid.types import Locale
from polyvalid.validators.registry import FieldRegistry


class ValidationEngine:
    """Configured entry point to catalogs, locale selection and validation."""

    def __init__(
        self,
        config: EngineConfig,
        catalogs: CatalogManager,
        selector: LocaleSelector,
        pipeline: ValidationPipeline,
    ) -> None:
        self.config = config
        self.catalogs = catalogs
        self.selector = selector
        self.pipeline = pipeline

    def select_locale(self, preference: str | None) -> Locale:
        return self.selector.select(preference)

    def resolver(self, preference: str | Locale | None = None) -> MessageResolver:
        """Resolver for a Locale or a raw language preference string."""
        locale = preference if isinstance(preference, Locale) else self.select_locale(preference)
        return MessageResolver(locale, self.catalogs)

    def validate_field(
        self,
        field_name: str,
        value: Any,
        accept_language: str | Locale | None = None,
    ) -> ValidationError | None:
        return self.pipeline.validate_field(field_name, value, self.resolver(accept_language))

    def validate_fields(
        self,
        fields: Iterable[FieldInput],
        accept_language: str | Locale | None = None,
    ) -> ValidationErrorSet:
        return self.pipeline.validate_fields(fields, self.resolver(accept_language))

    def validate_form(
        self,
        form_name: str,
        data: Mapping[str, Any],
        accept_language: str | Locale | None = None,
    ) -> ValidationErrorSet:
        return self.pipeline.validate_form(form_name, data, self.resolver(accept_language))


def build_engine(
    config: EngineConfig | None = None,
    registry: FieldRegistry | None = None,
) -> ValidationEngine:
    """Build an engine from configuration.

    Args:
        config: Engine configuration (default: ``EngineConfig()``)
        registry: Field and form definitions (default: built-in registry)
    """
    config = config or EngineConfig()
    catalogs = CatalogManager(base_path=config.catalog_root, cache=config.cache_catalogs)
    return ValidationEngine(
        config=config,
        catalogs=catalogs,
        selector=LocaleSelector(config.default_locale),
        pipeline=ValidationPipeline(max_workers=config.max_workers, registry=registry),
    )
