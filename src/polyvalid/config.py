"""Engine configuration.

Configuration is an explicit, immutable value built once at process start
and passed to the components that need it.

Usage:
    >>> from polyvalid.config import EngineConfig
    >>>
    >>> # Defaults: bundled catalogs, English fallback, 4 worker threads
    >>> config = EngineConfig()
    >>>
    >>> # From POLYVALID_* environment variables
    >>> config = EngineConfig.from_env()
    >>>
    >>> # Derived copy
    >>> config = config.replace(max_workers=1)
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from polyvalid.exceptions import ConfigError
from polyvalid.types import Locale

ENV_PREFIX = "POLYVALID_"

BUNDLED_LOCALES_DIR = Path(__file__).parent / "locales"

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(key, value, "expected a boolean")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(key, value, "expected an integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(key, value, "expected an integer") from None


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for the validation engine.

    Attributes:
        locales_dir: Root directory of catalog files laid out as
            ``<locales_dir>/<locale>/<namespace>.json``. None selects the
            catalogs bundled with the package.
        default_locale: Locale used when a language preference matches
            nothing.
        max_workers: Thread pool size for rule and field fan-out. 0 or 1
            evaluates sequentially.
        cache_catalogs: Keep loaded catalogs for the process lifetime.
    """

    locales_dir: Path | None = None
    default_locale: Locale = Locale.EN
    max_workers: int = 4
    cache_catalogs: bool = True

    def __post_init__(self) -> None:
        if self.max_workers < 0:
            raise ConfigError("max_workers", self.max_workers, "must be >= 0")
        if not isinstance(self.default_locale, Locale):
            raise ConfigError("default_locale", self.default_locale, "must be a Locale")

    @property
    def catalog_root(self) -> Path:
        """Directory catalogs are read from."""
        return self.locales_dir if self.locales_dir is not None else BUNDLED_LOCALES_DIR

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1

    def replace(self, **kwargs: Any) -> "EngineConfig":
        """Create a new config with updated values."""
        current = asdict(self)
        current.update(kwargs)
        return EngineConfig.from_mapping(current)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a plain mapping.

        Keys are the attribute names; unknown keys are ignored. String values
        are coerced the same way environment values are.

        Raises:
            ConfigError: If a value cannot be coerced.
        """
        kwargs: dict[str, Any] = {}

        locales_dir = data.get("locales_dir")
        if locales_dir not in (None, ""):
            kwargs["locales_dir"] = Path(locales_dir)

        default_locale = data.get("default_locale")
        if default_locale is not None:
            if isinstance(default_locale, Locale):
                kwargs["default_locale"] = default_locale
            else:
                kwargs["default_locale"] = Locale.from_code(str(default_locale))

        if data.get("max_workers") is not None:
            kwargs["max_workers"] = _parse_int("max_workers", data["max_workers"])

        if data.get("cache_catalogs") is not None:
            kwargs["cache_catalogs"] = _parse_bool("cache_catalogs", data["cache_catalogs"])

        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a config from ``POLYVALID_*`` environment variables.

        Recognized variables: POLYVALID_LOCALES_DIR, POLYVALID_DEFAULT_LOCALE,
        POLYVALID_MAX_WORKERS, POLYVALID_CACHE_CATALOGS.

        Args:
            environ: Environment mapping (default: ``os.environ``).

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        data = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in env.items()
            if key.startswith(ENV_PREFIX)
        }
        return cls.from_mapping(data)
