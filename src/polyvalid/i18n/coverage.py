"""Catalog coverage against a reference locale.

Translations are allowed to be partial; coverage shows which dotted keys
of the reference catalogs each locale is still missing, and which keys it
defines that the reference does not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from polyvalid.i18n.loader import CatalogManager
from polyvalid.types import Locale, Namespace


@dataclass(frozen=True)
class CoverageEntry:
    """Coverage of one (locale, namespace) catalog."""

    locale: Locale
    namespace: Namespace
    reference_keys: int
    missing: tuple[str, ...] = field(default=())
    extra: tuple[str, ...] = field(default=())

    @property
    def translated(self) -> int:
        return self.reference_keys - len(self.missing)

    @property
    def ratio(self) -> float:
        if self.reference_keys == 0:
            return 1.0
        return self.translated / self.reference_keys

    @property
    def complete(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict:
        return {
            "locale": self.locale.value,
            "namespace": self.namespace.value,
            "reference_keys": self.reference_keys,
            "translated": self.translated,
            "missing": list(self.missing),
            "extra": list(self.extra),
        }


def catalog_coverage(
    manager: CatalogManager,
    reference: Locale = Locale.EN,
    locales: Iterable[Locale] | None = None,
    namespaces: Iterable[Namespace] | None = None,
) -> list[CoverageEntry]:
    """Compare catalogs with the reference locale.

    Args:
        manager: Catalog source
        reference: Locale whose keys define completeness
        locales: Locales to check (default: all but the reference)
        namespaces: Namespaces to check (default: all)

    Returns:
        One entry per (locale, namespace), in enum order
    """
    target_locales = [
        loc for loc in (locales if locales is not None else Locale) if loc != reference
    ]
    entries: list[CoverageEntry] = []
    for namespace in namespaces if namespaces is not None else Namespace:
        expected = set(manager.get_catalog(reference, namespace).keys())
        for locale in target_locales:
            actual = set(manager.get_catalog(locale, namespace).keys())
            entries.append(
                CoverageEntry(
                    locale=locale,
                    namespace=namespace,
                    reference_keys=len(expected),
                    missing=tuple(sorted(expected - actual)),
                    extra=tuple(sorted(actual - expected)),
                )
            )
    entries.sort(key=lambda e: (list(Locale).index(e.locale), list(Namespace).index(e.namespace)))
    return entries
