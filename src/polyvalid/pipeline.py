"""Validation pipeline.

Runs every rule of a field against its value and folds all failures into a
single ``ValidationError`` carrying the field's canonical code. The pipeline
never stops at the first failing rule, so a client sees every violated
constraint in one round trip.

Rules are pure, so they are fanned out over a thread pool when
``max_workers`` is above 1. Results are always collected in declaration
order, which keeps messages and error sets reproducible.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Sequence, Union

from polyvalid.i18n.resolver import MessageResolver
from polyvalid.results import ErrorAggregator, ValidationError, ValidationErrorSet
from polyvalid.validators.base import FieldValidator, ValidationRule
from polyvalid.validators.registry import FieldRegistry, registry as default_registry


logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = ", "

# (field, value) uses the registered validator; (field, value, validator)
# supplies one explicitly.
FieldInput = Union[tuple[str, Any], tuple[str, Any, FieldValidator]]


def _dedupe(messages: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for message in messages:
        if message not in seen:
            seen.add(message)
            unique.append(message)
    return unique


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class ValidationPipeline:
    """Runs field validators and aggregates their failures.

    Example:
        pipeline = ValidationPipeline(max_workers=4)
        resolver = MessageResolver(Locale.EN, catalogs)

        error = pipeline.validate_field("email", "a@b.c", resolver)
        # ValidationError(code="email.invalid", message="The domain part ...")

        errors = pipeline.validate_form(
            "register",
            {"name": "Ada", "email": "ada@example.org", "password": "secret"},
            resolver,
        )
    """

    def __init__(
        self,
        max_workers: int = 4,
        registry: FieldRegistry | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            max_workers: Thread pool size; 0 or 1 runs everything inline
            registry: Field and form definitions (default: built-in registry)
        """
        if max_workers < 0:
            raise ValueError(f"max_workers must be >= 0, got {max_workers}")
        self.max_workers = max_workers
        self.registry = registry if registry is not None else default_registry

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1

    def _run_rules(
        self,
        rules: Sequence[ValidationRule],
        value: str,
        messages: MessageResolver,
        executor: ThreadPoolExecutor | None,
    ) -> list[str]:
        if executor is None or len(rules) < 2:
            outcomes = [rule(value, messages) for rule in rules]
        else:
            outcomes = list(executor.map(lambda rule: rule(value, messages), rules))
        return [reason for reason in outcomes if reason is not None]

    def collect_failures(
        self,
        validator: FieldValidator,
        value: str,
        messages: MessageResolver,
        executor: ThreadPoolExecutor | None = None,
    ) -> list[str]:
        """Run a field's rules and return every failure reason.

        Catch-all rules only run when all regular rules passed. Identical
        reason strings are kept once, first occurrence first.
        """
        failures = self._run_rules(validator.rules, value, messages, executor)
        if not failures and validator.catch_all:
            failures = self._run_rules(validator.catch_all, value, messages, executor)
        return _dedupe(failures)

    def _validate(
        self,
        validator: FieldValidator,
        value: Any,
        messages: MessageResolver,
        executor: ThreadPoolExecutor | None,
    ) -> ValidationError | None:
        text = _as_text(value)
        failures = self.collect_failures(validator, text, messages, executor)
        logger.debug(
            "Validated field '%s' (%s): %d failure(s)",
            validator.field, messages.locale.value, len(failures),
        )
        if not failures:
            return None
        return ValidationError(
            code=validator.code,
            message=MESSAGE_SEPARATOR.join(failures),
            value=text,
        )

    def validate_field(
        self,
        field_name: str,
        value: Any,
        messages: MessageResolver,
        validator: FieldValidator | None = None,
    ) -> ValidationError | None:
        """Validate one field.

        Args:
            field_name: Field to validate
            value: Raw value; None is treated as an empty string
            messages: Resolver bound to the request locale
            validator: Rule set to apply (default: registered for the field)

        Returns:
            One aggregated ValidationError, or None when every rule passed

        Raises:
            UnknownFieldError: If no validator is given or registered.
        """
        validator = validator or self.registry.get(field_name)
        if not self.parallel:
            return self._validate(validator, value, messages, None)
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="polyvalid-rule"
        ) as executor:
            return self._validate(validator, value, messages, executor)

    def _resolve_inputs(
        self, fields: Iterable[FieldInput]
    ) -> list[tuple[str, Any, FieldValidator]]:
        resolved = []
        for item in fields:
            if len(item) == 3:
                field_name, value, validator = item  # type: ignore[misc]
            else:
                field_name, value = item  # type: ignore[misc]
                validator = self.registry.get(field_name)
            resolved.append((field_name, value, validator))
        return resolved

    def validate_fields(
        self,
        fields: Iterable[FieldInput],
        messages: MessageResolver,
    ) -> ValidationErrorSet:
        """Validate several fields and merge the results.

        Fields are evaluated concurrently when the pipeline is parallel;
        their errors are merged in input order after all of them finished.

        Args:
            fields: ``(field, value)`` or ``(field, value, validator)`` items
            messages: Resolver bound to the request locale

        Returns:
            Errors keyed by field name; empty when everything passed
        """
        inputs = self._resolve_inputs(fields)
        aggregator = ErrorAggregator()

        if self.parallel and len(inputs) > 1:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="polyvalid-field"
            ) as executor:
                results = list(executor.map(
                    lambda item: self._validate(item[2], item[1], messages, None),
                    inputs,
                ))
        else:
            results = [self._validate(v, value, messages, None) for _, value, v in inputs]

        for (field_name, _, _), error in zip(inputs, results):
            aggregator.add(field_name, error)
        return aggregator.build()

    def validate_form(
        self,
        form_name: str,
        data: Mapping[str, Any],
        messages: MessageResolver,
    ) -> ValidationErrorSet:
        """Validate the fields a registered form declares.

        Missing fields are validated as empty strings.

        Raises:
            UnknownFormError: If the form is not registered.
        """
        validators = self.registry.form(form_name)
        return self.validate_fields(
            [(v.field, data.get(v.field), v) for v in validators],
            messages,
        )
