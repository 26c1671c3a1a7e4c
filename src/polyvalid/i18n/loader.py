"""Catalog loading and caching.

Catalog documents live one per (locale, namespace):

    locales/
      en/
        validation.json
        user.json
        auth.json
      de/
        validation.json
        ...

Loading never fails. A missing file or a document that cannot be parsed
yields an empty catalog, so every lookup falls back to the caller's
default text.

Usage:
    from polyvalid.i18n.loader import CatalogManager

    manager = CatalogManager(base_path=Path("locales"))
    catalog = manager.get_catalog(Locale.DE, Namespace.VALIDATION)
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from polyvalid.i18n.catalog import MessageCatalog
from polyvalid.types import Locale, Namespace


logger = logging.getLogger(__name__)


# ==============================================================================
# Catalog Storage Backends
# ==============================================================================

class CatalogStorageBackend:
    """Base class for catalog storage backends."""

    def load(self, locale: Locale, namespace: Namespace) -> Mapping[str, Any] | None:
        """Load a catalog document.

        Args:
            locale: Target locale
            namespace: Target namespace

        Returns:
            Decoded document, or None when absent or unreadable
        """
        raise NotImplementedError

    def exists(self, locale: Locale, namespace: Namespace) -> bool:
        raise NotImplementedError


class FileSystemStorage(CatalogStorageBackend):
    """Filesystem-based catalog storage.

    Reads ``<base_path>/<locale>/<namespace><ext>`` trying each extension in
    order. JSON and YAML documents are supported.
    """

    def __init__(
        self,
        base_path: Path | str,
        extensions: tuple[str, ...] = (".json", ".yaml", ".yml"),
        encoding: str = "utf-8",
    ) -> None:
        """Initialize filesystem storage.

        Args:
            base_path: Base directory for catalogs
            extensions: File extensions to try, in order
            encoding: File encoding
        """
        self.base_path = Path(base_path)
        self.extensions = extensions
        self.encoding = encoding

    def _get_path(self, locale: Locale, namespace: Namespace) -> Path | None:
        locale_dir = self.base_path / locale.value
        for ext in self.extensions:
            path = locale_dir / f"{namespace.value}{ext}"
            if path.is_file():
                return path
        return None

    def load(self, locale: Locale, namespace: Namespace) -> Mapping[str, Any] | None:
        path = self._get_path(locale, namespace)
        if path is None:
            logger.debug(
                "No %s catalog for locale '%s' under %s",
                namespace.value, locale.value, self.base_path,
            )
            return None

        try:
            with open(path, "r", encoding=self.encoding) as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, RecursionError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load catalog from {path}: {e}")
            return None

        if not isinstance(data, Mapping):
            logger.warning(
                f"Ignoring catalog {path}: top level is {type(data).__name__}, expected an object"
            )
            return None
        return data

    def exists(self, locale: Locale, namespace: Namespace) -> bool:
        return self._get_path(locale, namespace) is not None


class MemoryStorage(CatalogStorageBackend):
    """In-memory catalog storage, mostly for tests and embedding."""

    def __init__(
        self,
        catalogs: Mapping[tuple[Locale, Namespace], Mapping[str, Any]] | None = None,
    ) -> None:
        self._catalogs: dict[tuple[Locale, Namespace], Mapping[str, Any]] = dict(catalogs or {})

    def load(self, locale: Locale, namespace: Namespace) -> Mapping[str, Any] | None:
        return self._catalogs.get((locale, namespace))

    def save(self, locale: Locale, namespace: Namespace, document: Mapping[str, Any]) -> None:
        self._catalogs[(locale, namespace)] = document

    def exists(self, locale: Locale, namespace: Namespace) -> bool:
        return (locale, namespace) in self._catalogs


# ==============================================================================
# Catalog Manager
# ==============================================================================

class CatalogManager:
    """Loads catalogs on first use and optionally keeps them.

    Catalogs are read-only once built, so cached instances are shared
    between threads without locking. Two threads loading the same catalog
    at once both produce equivalent results; the lock only guards the cache
    dictionary itself.

    Example:
        manager = CatalogManager(base_path=Path("locales"))
        catalog = manager.get_catalog(Locale.ID, Namespace.USER)

        # Warm the cache at startup
        manager.preload([Locale.EN, Locale.DE])
    """

    def __init__(
        self,
        base_path: Path | str | None = None,
        storage: CatalogStorageBackend | None = None,
        cache: bool = True,
    ) -> None:
        """Initialize catalog manager.

        Args:
            base_path: Path for filesystem storage
            storage: Custom storage backend (takes precedence over base_path)
            cache: Keep loaded catalogs
        """
        if storage is not None:
            self.storage = storage
        elif base_path is not None:
            self.storage = FileSystemStorage(base_path)
        else:
            self.storage = MemoryStorage()

        self.cache = cache
        self._catalogs: dict[tuple[Locale, Namespace], MessageCatalog] = {}
        self._lock = threading.Lock()

    def _load(self, locale: Locale, namespace: Namespace) -> MessageCatalog:
        document = self.storage.load(locale, namespace)
        if document is None:
            return MessageCatalog.empty(locale, namespace)
        return MessageCatalog(locale, namespace, document)

    def get_catalog(self, locale: Locale, namespace: Namespace) -> MessageCatalog:
        """Get the catalog for a locale and namespace.

        Returns:
            The catalog, empty when it could not be loaded
        """
        key = (locale, namespace)
        if self.cache:
            cached = self._catalogs.get(key)
            if cached is not None:
                return cached

        catalog = self._load(locale, namespace)

        if self.cache:
            with self._lock:
                catalog = self._catalogs.setdefault(key, catalog)
        return catalog

    def preload(
        self,
        locales: Iterable[Locale] | None = None,
        namespaces: Iterable[Namespace] | None = None,
    ) -> int:
        """Load catalogs ahead of use.

        Args:
            locales: Locales to load (default: all)
            namespaces: Namespaces to load (default: all)

        Returns:
            Number of non-empty catalogs loaded
        """
        loaded = 0
        namespace_list = list(namespaces or Namespace)
        for locale in locales or Locale:
            for namespace in namespace_list:
                if not self.get_catalog(locale, namespace).is_empty:
                    loaded += 1
        return loaded

    def clear(self) -> None:
        """Drop cached catalogs."""
        with self._lock:
            self._catalogs.clear()

    def __contains__(self, key: tuple[Locale, Namespace]) -> bool:
        return key in self._catalogs
