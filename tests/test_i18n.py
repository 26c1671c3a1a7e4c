"""Tests for locale selection, message catalogs and message resolution.

Tests cover:
- Locale normalization and language negotiation
- Catalog tree lookups
- Flatten / unflatten helpers
- Storage backends (filesystem JSON/YAML, memory)
- Catalog manager caching and concurrent loads
- Resolver fallback behaviour
- Catalog coverage
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from polyvalid.i18n import (
    CatalogManager,
    FileSystemStorage,
    LocaleSelector,
    MemoryStorage,
    MessageCatalog,
    MessageResolver,
    flatten_catalog,
    primary_subtag,
    select_locale,
    unflatten_catalog,
)
from polyvalid.i18n.coverage import catalog_coverage
from polyvalid.types import Locale, Namespace


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sample_tree() -> dict:
    return {
        "email": {
            "invalid": "Invalid email format",
            "too_short": "Email too short",
        },
        "name": {"empty": "Name must not be empty"},
        "limits": {"max": 100},
    }


@pytest.fixture
def locales_dir(tmp_path: Path, sample_tree: dict) -> Path:
    """Catalog root with an English and a German validation catalog."""
    (tmp_path / "en").mkdir()
    (tmp_path / "en" / "validation.json").write_text(json.dumps(sample_tree), encoding="utf-8")
    (tmp_path / "de").mkdir()
    (tmp_path / "de" / "validation.json").write_text(
        json.dumps({"email": {"invalid": "Ungültiges E-Mail-Format"}}),
        encoding="utf-8",
    )
    return tmp_path


# =============================================================================
# Locale Tests
# =============================================================================


class TestLocale:
    """Test Locale normalization."""

    def test_from_code_exact(self):
        """Test exact codes map to their locale."""
        assert Locale.from_code("de") is Locale.DE
        assert Locale.from_code("ja") is Locale.JA
        assert Locale.from_code("ID") is Locale.ID

    def test_from_code_unknown_uses_default(self):
        """Test unknown codes fall back to the default."""
        assert Locale.from_code("xx") is Locale.EN
        assert Locale.from_code("jp") is Locale.EN
        assert Locale.from_code("xx", Locale.DE) is Locale.DE

    def test_from_code_missing(self):
        """Test absent codes fall back to the default."""
        assert Locale.from_code(None) is Locale.EN
        assert Locale.from_code("", Locale.ID) is Locale.ID


class TestLocaleSelector:
    """Test language negotiation."""

    def test_first_tag_primary_subtag(self):
        """Test the primary subtag of the first tag wins."""
        assert select_locale("id-ID,en;q=0.8") is Locale.ID

    def test_quality_weights_ignored(self):
        """Test later preferences are ignored even with higher weight."""
        assert select_locale("xx,de;q=1.0") is Locale.EN

    def test_unknown_tag_uses_default(self):
        """Test an unrecognized tag resolves to the configured default."""
        selector = LocaleSelector(default=Locale.DE)
        assert selector.select("xx") is Locale.DE
        assert selector("fr-FR") is Locale.DE

    def test_absent_header_uses_default(self):
        """Test missing input resolves to the default."""
        assert LocaleSelector(Locale.JA).select(None) is Locale.JA
        assert LocaleSelector(Locale.JA).select("") is Locale.JA

    def test_case_and_whitespace(self):
        """Test tags are lowercased and trimmed."""
        assert select_locale(" DE-at , en") is Locale.DE

    def test_no_partial_matching(self):
        """Test prefixes of supported codes do not match."""
        assert select_locale("d") is Locale.EN
        assert select_locale("deu") is Locale.EN

    def test_primary_subtag(self):
        """Test subtag extraction."""
        assert primary_subtag("ja-JP") == "ja"
        assert primary_subtag("de;q=0.9") == "de"
        assert primary_subtag(",") is None
        assert primary_subtag(None) is None


# =============================================================================
# Catalog Tests
# =============================================================================


class TestMessageCatalog:
    """Test dotted-path lookups on the catalog tree."""

    def test_leaf_lookup(self, sample_tree: dict):
        """Test resolving a leaf string."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        assert catalog.get("email.invalid") == "Invalid email format"
        assert "name.empty" in catalog

    def test_missing_segment(self, sample_tree: dict):
        """Test any missing segment is a miss."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        assert catalog.get("email.unknown") is None
        assert catalog.get("phone.invalid") is None
        assert catalog.get("email.invalid.deeper") is None

    def test_branch_is_not_a_leaf(self, sample_tree: dict):
        """Test a path ending on a branch is a miss."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        assert catalog.get("email") is None
        assert catalog.node("email") is not None

    def test_non_string_leaf(self, sample_tree: dict):
        """Test non-string values never resolve as messages."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        assert catalog.get("limits.max") is None

    def test_empty_catalog(self):
        """Test an empty catalog resolves nothing."""
        catalog = MessageCatalog.empty(Locale.DE, Namespace.AUTH)
        assert catalog.is_empty
        assert catalog.get("login.success") is None
        assert len(catalog) == 0

    def test_keys(self, sample_tree: dict):
        """Test keys lists leaf paths only."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        assert catalog.keys() == ["email.invalid", "email.too_short", "name.empty"]

    def test_catalog_is_isolated_from_source(self, sample_tree: dict):
        """Test later changes to the source document do not leak in."""
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, sample_tree)
        sample_tree["email"]["invalid"] = "changed"
        assert catalog.get("email.invalid") == "Invalid email format"
        assert catalog.to_dict()["email"]["invalid"] == "Invalid email format"


class TestFlatten:
    """Test flatten/unflatten helpers."""

    def test_flatten(self, sample_tree: dict):
        """Test nested keys become dotted paths."""
        assert flatten_catalog(sample_tree) == {
            "email.invalid": "Invalid email format",
            "email.too_short": "Email too short",
            "name.empty": "Name must not be empty",
        }

    def test_unflatten(self):
        """Test dotted paths become nested keys."""
        assert unflatten_catalog({"a.b": "x", "a.c": "y", "d": "z"}) == {
            "a": {"b": "x", "c": "y"},
            "d": "z",
        }

    def test_unflatten_prefers_branch(self):
        """Test a leaf shadowed by a deeper key becomes a branch."""
        assert unflatten_catalog({"a": "leaf", "a.b": "x"}) == {"a": {"b": "x"}}


# =============================================================================
# Storage Tests
# =============================================================================


class TestFileSystemStorage:
    """Test loading catalogs from disk."""

    def test_load_json(self, locales_dir: Path):
        """Test loading a JSON catalog."""
        storage = FileSystemStorage(locales_dir)
        data = storage.load(Locale.DE, Namespace.VALIDATION)
        assert data == {"email": {"invalid": "Ungültiges E-Mail-Format"}}
        assert storage.exists(Locale.DE, Namespace.VALIDATION)

    def test_load_yaml(self, tmp_path: Path):
        """Test loading a YAML catalog."""
        (tmp_path / "ja").mkdir()
        (tmp_path / "ja" / "auth.yaml").write_text(
            "login:\n  success: ログインしました\n", encoding="utf-8"
        )
        storage = FileSystemStorage(tmp_path)
        assert storage.load(Locale.JA, Namespace.AUTH) == {"login": {"success": "ログインしました"}}

    def test_missing_file(self, locales_dir: Path):
        """Test an absent catalog loads as None."""
        storage = FileSystemStorage(locales_dir)
        assert storage.load(Locale.ID, Namespace.VALIDATION) is None
        assert not storage.exists(Locale.ID, Namespace.USER)

    def test_malformed_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        """Test a corrupt catalog degrades to None with a warning."""
        (tmp_path / "en").mkdir()
        (tmp_path / "en" / "validation.json").write_text("{not json", encoding="utf-8")
        storage = FileSystemStorage(tmp_path)

        with caplog.at_level(logging.WARNING, logger="polyvalid.i18n.loader"):
            assert storage.load(Locale.EN, Namespace.VALIDATION) is None
        assert "Failed to load catalog" in caplog.text

    def test_deeply_nested_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        """Test a document nested beyond the parser's recursion limit loads as None."""
        depth = 200_000
        (tmp_path / "en").mkdir()
        (tmp_path / "en" / "validation.json").write_text(
            '{"a": ' * depth + '"x"' + "}" * depth, encoding="utf-8"
        )
        manager = CatalogManager(base_path=tmp_path)

        with caplog.at_level(logging.WARNING, logger="polyvalid.i18n.loader"):
            assert manager.get_catalog(Locale.EN, Namespace.VALIDATION).is_empty
        assert "Failed to load catalog" in caplog.text

    def test_non_object_document(self, tmp_path: Path):
        """Test a document whose top level is not an object is ignored."""
        (tmp_path / "en").mkdir()
        (tmp_path / "en" / "user.json").write_text('["a", "b"]', encoding="utf-8")
        assert FileSystemStorage(tmp_path).load(Locale.EN, Namespace.USER) is None


class TestCatalogManager:
    """Test catalog loading and caching."""

    def test_get_catalog(self, locales_dir: Path):
        """Test catalogs are built from storage."""
        manager = CatalogManager(base_path=locales_dir)
        catalog = manager.get_catalog(Locale.EN, Namespace.VALIDATION)
        assert catalog.get("name.empty") == "Name must not be empty"
        assert catalog.locale is Locale.EN

    def test_missing_catalog_is_empty(self, locales_dir: Path):
        """Test missing catalogs degrade to empty ones."""
        manager = CatalogManager(base_path=locales_dir)
        assert manager.get_catalog(Locale.JA, Namespace.USER).is_empty

    def test_caching(self, locales_dir: Path):
        """Test cached catalogs are reused."""
        manager = CatalogManager(base_path=locales_dir)
        first = manager.get_catalog(Locale.EN, Namespace.VALIDATION)
        assert (Locale.EN, Namespace.VALIDATION) in manager
        assert manager.get_catalog(Locale.EN, Namespace.VALIDATION) is first

        manager.clear()
        assert (Locale.EN, Namespace.VALIDATION) not in manager

    def test_cache_disabled(self, locales_dir: Path):
        """Test every call reloads when caching is off."""
        manager = CatalogManager(base_path=locales_dir, cache=False)
        first = manager.get_catalog(Locale.EN, Namespace.VALIDATION)
        second = manager.get_catalog(Locale.EN, Namespace.VALIDATION)
        assert first is not second
        assert first.keys() == second.keys()

    def test_preload(self, locales_dir: Path):
        """Test preloading counts non-empty catalogs."""
        manager = CatalogManager(base_path=locales_dir)
        assert manager.preload() == 2
        assert (Locale.DE, Namespace.VALIDATION) in manager

    def test_concurrent_loads(self, locales_dir: Path):
        """Test racing first loads all see the same catalog."""
        manager = CatalogManager(base_path=locales_dir)
        barrier = threading.Barrier(8)

        def load(_):
            barrier.wait()
            return manager.get_catalog(Locale.DE, Namespace.VALIDATION)

        with ThreadPoolExecutor(max_workers=8) as executor:
            catalogs = list(executor.map(load, range(8)))

        assert all(c.get("email.invalid") == "Ungültiges E-Mail-Format" for c in catalogs)
        assert all(c is catalogs[0] for c in catalogs)

    def test_memory_storage(self):
        """Test the in-memory backend."""
        storage = MemoryStorage()
        storage.save(Locale.ID, Namespace.AUTH, {"login": {"success": "Login berhasil"}})
        manager = CatalogManager(storage=storage)
        assert manager.get_catalog(Locale.ID, Namespace.AUTH).get("login.success") == "Login berhasil"


# =============================================================================
# Resolver Tests
# =============================================================================


class TestMessageResolver:
    """Test message resolution with fallback."""

    def test_resolves_catalog_message(self, locales_dir: Path):
        """Test a present leaf is returned."""
        resolver = MessageResolver(Locale.DE, CatalogManager(base_path=locales_dir))
        assert resolver.validation("email.invalid", "Invalid email format") == "Ungültiges E-Mail-Format"

    def test_missing_key_returns_default(self, locales_dir: Path):
        """Test partial translations fall back per key."""
        resolver = MessageResolver(Locale.DE, CatalogManager(base_path=locales_dir))
        assert resolver.validation("name.empty", "Name must not be empty") == "Name must not be empty"

    def test_missing_catalog_returns_default(self):
        """Test a locale with no catalog always yields the default verbatim."""
        resolver = MessageResolver(Locale.JA, CatalogManager(storage=MemoryStorage()))
        for namespace in Namespace:
            assert resolver.resolve(namespace, "any.path", "fallback text") == "fallback text"

    def test_branch_returns_default(self, locales_dir: Path):
        """Test a path ending on a branch yields the default."""
        resolver = MessageResolver(Locale.EN, CatalogManager(base_path=locales_dir))
        assert resolver.validation("email", "fallback") == "fallback"

    def test_namespace_as_string(self, locales_dir: Path):
        """Test namespaces may be given by name; unknown names fall back."""
        resolver = MessageResolver(Locale.EN, CatalogManager(base_path=locales_dir))
        assert resolver.resolve("validation", "email.invalid", "x") == "Invalid email format"
        assert resolver.resolve("billing", "email.invalid", "x") == "x"

    def test_empty_default_is_returned(self):
        """Test an empty default is still returned verbatim."""
        resolver = MessageResolver(Locale.EN, CatalogManager(storage=MemoryStorage()))
        assert resolver.auth("login.success", "") == ""

    def test_bundled_catalogs(self):
        """Test the catalogs shipped with the package resolve."""
        from polyvalid.config import BUNDLED_LOCALES_DIR

        manager = CatalogManager(base_path=BUNDLED_LOCALES_DIR)
        assert MessageResolver(Locale.ID, manager).auth("login.success", "x") == "Login berhasil"
        assert MessageResolver(Locale.DE, manager).user("delete.success", "x") == (
            "Benutzer erfolgreich gelöscht."
        )


# =============================================================================
# Coverage Tests
# =============================================================================


class TestCatalogCoverage:
    """Test coverage against the reference locale."""

    def test_missing_and_extra_keys(self, locales_dir: Path):
        """Test missing keys are reported per locale."""
        (locales_dir / "de" / "validation.json").write_text(
            json.dumps({"email": {"invalid": "x", "legacy": "y"}}), encoding="utf-8"
        )
        entries = catalog_coverage(
            CatalogManager(base_path=locales_dir),
            locales=[Locale.DE],
            namespaces=[Namespace.VALIDATION],
        )
        assert len(entries) == 1
        entry = entries[0]
        assert entry.missing == ("email.too_short", "name.empty")
        assert entry.extra == ("email.legacy",)
        assert entry.translated == 1
        assert not entry.complete

    def test_bundled_catalogs_complete(self):
        """Test every bundled locale covers the English catalogs."""
        from polyvalid.config import BUNDLED_LOCALES_DIR

        entries = catalog_coverage(CatalogManager(base_path=BUNDLED_LOCALES_DIR))
        assert len(entries) == 3 * len(Namespace)
        assert all(entry.complete for entry in entries)
        assert all(not entry.extra for entry in entries)
