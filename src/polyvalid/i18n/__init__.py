"""Locale selection, message catalogs and message resolution.

Example:
    from polyvalid.i18n import CatalogManager, MessageResolver, select_locale

    locale = select_locale(request.headers.get("Accept-Language"))
    resolver = MessageResolver(locale, CatalogManager(base_path="locales"))
    resolver.validation("email.invalid", "Invalid email format")
"""

from polyvalid.i18n.catalog import (
    CatalogNode,
    MessageCatalog,
    flatten_catalog,
    unflatten_catalog,
)
from polyvalid.i18n.loader import (
    CatalogManager,
    CatalogStorageBackend,
    FileSystemStorage,
    MemoryStorage,
)
from polyvalid.i18n.locale import LocaleSelector, primary_subtag, select_locale
from polyvalid.i18n.resolver import MessageResolver

__all__ = [
    "CatalogNode",
    "MessageCatalog",
    "flatten_catalog",
    "unflatten_catalog",
    "CatalogManager",
    "CatalogStorageBackend",
    "FileSystemStorage",
    "MemoryStorage",
    "LocaleSelector",
    "primary_subtag",
    "select_locale",
    "MessageResolver",
]
