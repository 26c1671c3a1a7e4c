"""Language negotiation.

Maps a language-preference string such as an ``Accept-Language`` header
value to one of the supported locales. Only the primary subtag of the first
listed preference is considered; quality weights are ignored.
"""

from __future__ import annotations

from polyvalid.types import Locale


def primary_subtag(preference: str | None) -> str | None:
    """Extract the lowercased primary subtag of the first preference.

    Example:
        primary_subtag("id-ID,en;q=0.8")   # "id"
        primary_subtag("de;q=0.9")         # "de"
        primary_subtag("")                 # None
    """
    if not preference:
        return None
    first = preference.split(",", 1)[0]
    tag = first.split(";", 1)[0]
    subtag = tag.split("-", 1)[0].strip().lower()
    return subtag or None


class LocaleSelector:
    """Selects a supported locale with a fixed default.

    Example:
        selector = LocaleSelector(default=Locale.EN)
        selector.select("id-ID,en;q=0.8")   # Locale.ID
        selector.select("xx")               # Locale.EN
        selector.select(None)               # Locale.EN
    """

    def __init__(self, default: Locale = Locale.EN):
        self.default = default

    def select(self, preference: str | None) -> Locale:
        return Locale.from_code(primary_subtag(preference), self.default)

    __call__ = select

    def __repr__(self) -> str:
        return f"LocaleSelector(default={self.default.value!r})"


def select_locale(preference: str | None, default: Locale = Locale.EN) -> Locale:
    """Resolve a language preference to a supported locale."""
    return LocaleSelector(default).select(preference)
