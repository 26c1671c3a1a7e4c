"""Base building blocks for field validators.

A ``ValidationRule`` is one named predicate over a string value. It returns
None when the value passes, or the localized failure reason when it does
not. Rules are plain module-level functions with no captured mutable
state, so any rule may run on any thread.

A ``FieldValidator`` binds an ordered tuple of rules to a field name and
the single canonical error code reported for that field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from polyvalid.i18n.resolver import MessageResolver


RuleCheck = Callable[[str, "MessageResolver"], "str | None"]


@dataclass(frozen=True)
class ValidationRule:
    """A named, side-effect-free check.

    Attributes:
        name: Identifier of the check, e.g. ``missing_digit``
        check: ``(value, resolver) -> reason | None``
    """

    name: str
    check: RuleCheck

    def __call__(self, value: str, messages: "MessageResolver") -> str | None:
        return self.check(value, messages)


def validation_rule(func: RuleCheck) -> ValidationRule:
    """Decorator turning a check function into a ValidationRule."""
    return ValidationRule(name=func.__name__, check=func)


@dataclass(frozen=True)
class FieldValidator:
    """The rule set for one field.

    Attributes:
        field: Field name, e.g. ``email``
        code: Canonical error code reported for the field, e.g. ``email.invalid``
        rules: Checks that always run
        catch_all: Checks that only run when every rule in ``rules`` passed
    """

    field: str
    code: str
    rules: tuple[ValidationRule, ...]
    catch_all: tuple[ValidationRule, ...] = ()

    def __post_init__(self) -> None:
        if not self.code.startswith(f"{self.field}."):
            raise ValueError(
                f"Error code '{self.code}' must be namespaced by field '{self.field}'"
            )

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in (*self.rules, *self.catch_all)]
