"""Type definitions for polyvalid."""

from __future__ import annotations

from enum import Enum


class Locale(str, Enum):
    """Supported message locales.

    The set is closed: any other language code normalizes to a default
    locale instead of raising.
    """

    EN = "en"
    DE = "de"
    ID = "id"
    JA = "ja"

    @classmethod
    def from_code(cls, code: str | None, default: "Locale | None" = None) -> "Locale":
        """Map a language code to a supported locale.

        Matching is exact after lowercasing; unknown or missing codes return
        ``default`` (English when no default is given).

        Args:
            code: Primary language subtag, e.g. "de".
            default: Locale returned on a miss.

        Returns:
            The matching Locale.
        """
        fallback = default if default is not None else cls.EN
        if not code:
            return fallback
        try:
            return cls(code.strip().lower())
        except ValueError:
            return fallback


class Namespace(str, Enum):
    """Message namespaces; one catalog file per locale and namespace."""

    VALIDATION = "validation"
    USER = "user"
    AUTH = "auth"
