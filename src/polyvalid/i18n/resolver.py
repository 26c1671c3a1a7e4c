"""Message resolution bound to one locale."""

from __future__ import annotations

from polyvalid.i18n.catalog import MessageCatalog
from polyvalid.i18n.loader import CatalogManager
from polyvalid.types import Locale, Namespace


class MessageResolver:
    """Resolves dotted message paths for a single locale.

    Every lookup carries its own default text, which is returned verbatim
    when the catalog is missing, the path does not exist, or the path ends
    on a branch. Resolution therefore never fails, and behaviour stays
    correct with no catalog files at all.

    Example:
        resolver = MessageResolver(Locale.DE, manager)
        resolver.resolve(Namespace.VALIDATION, "name.empty", "Name must not be empty")
        resolver.validation("name.empty", "Name must not be empty")
    """

    __slots__ = ("locale", "_catalogs")

    def __init__(self, locale: Locale, catalogs: CatalogManager | None = None):
        self.locale = locale
        self._catalogs = catalogs if catalogs is not None else CatalogManager()

    def catalog(self, namespace: Namespace) -> MessageCatalog:
        return self._catalogs.get_catalog(self.locale, namespace)

    def resolve(self, namespace: Namespace | str, path: str, default: str) -> str:
        """Resolve a message, falling back to ``default``.

        Args:
            namespace: Message namespace
            path: Dotted path inside the namespace catalog
            default: Text returned on any miss

        Returns:
            The catalog leaf string or ``default``
        """
        try:
            ns = Namespace(namespace)
        except ValueError:
            return default
        message = self.catalog(ns).get(path)
        return default if message is None else message

    def validation(self, path: str, default: str) -> str:
        return self.resolve(Namespace.VALIDATION, path, default)

    def user(self, path: str, default: str) -> str:
        return self.resolve(Namespace.USER, path, default)

    def auth(self, path: str, default: str) -> str:
        return self.resolve(Namespace.AUTH, path, default)

    def __repr__(self) -> str:
        return f"MessageResolver(locale={self.locale.value!r})"
