"""Message catalogs.

A catalog is the message tree for one (locale, namespace) pair. Nodes are
either branches (a mapping from key to child node) or leaves (a string):

    {"email": {"too_short": "Email must be at least 5 characters"}}

Messages are addressed with dotted paths such as ``email.too_short``. The
tree is loosely structured on purpose so that partial translations are
valid; anything that is not found resolves to "missing" rather than an
error.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

from polyvalid.types import Locale, Namespace

# A catalog node is a leaf string or a branch mapping keys to nodes.
CatalogNode = Union[str, Mapping[str, "CatalogNode"]]

PATH_SEPARATOR = "."


def _freeze(node: Any) -> Any:
    """Copy a decoded document into read-only mappings."""
    if isinstance(node, Mapping):
        return MappingProxyType({str(key): _freeze(value) for key, value in node.items()})
    return node


class MessageCatalog:
    """Read-only message tree for a single locale and namespace.

    An empty catalog (``root`` of None) stands for a catalog that is absent
    or failed to load; every lookup on it misses.

    Example:
        catalog = MessageCatalog(Locale.EN, Namespace.VALIDATION, {
            "email": {"invalid": "Invalid email format"},
        })
        catalog.get("email.invalid")    # "Invalid email format"
        catalog.get("email")            # None (branch, not a leaf)
        catalog.get("email.missing")    # None
    """

    __slots__ = ("locale", "namespace", "_root")

    def __init__(
        self,
        locale: Locale,
        namespace: Namespace,
        root: Mapping[str, Any] | None = None,
    ):
        self.locale = locale
        self.namespace = namespace
        self._root = _freeze(root) if isinstance(root, Mapping) else None

    @classmethod
    def empty(cls, locale: Locale, namespace: Namespace) -> "MessageCatalog":
        """Create a catalog that resolves nothing."""
        return cls(locale, namespace, None)

    @property
    def is_empty(self) -> bool:
        return not self._root

    def node(self, path: str) -> Any | None:
        """Walk a dotted path and return the node found there.

        Args:
            path: Dotted key path.

        Returns:
            Leaf, branch or other JSON value, or None when any segment is
            missing or the walk hits a non-mapping before the end.
        """
        current: Any = self._root
        for segment in path.split(PATH_SEPARATOR):
            if not isinstance(current, Mapping):
                return None
            if segment not in current:
                return None
            current = current[segment]
        return current

    def get(self, path: str) -> str | None:
        """Get the leaf string at a dotted path.

        Paths that end on a branch or on a non-string value are misses.
        """
        value = self.node(path)
        return value if isinstance(value, str) else None

    def has(self, path: str) -> bool:
        return self.get(path) is not None

    def keys(self) -> list[str]:
        """Dotted paths of every leaf string, sorted."""
        return sorted(flatten_catalog(self._root or {}))

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the tree."""
        return _thaw(self._root) if self._root is not None else {}

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __len__(self) -> int:
        return len(self.keys())

    def __repr__(self) -> str:
        return (
            f"MessageCatalog(locale={self.locale.value!r}, "
            f"namespace={self.namespace.value!r}, keys={len(self)})"
        )


def _thaw(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {key: _thaw(value) for key, value in node.items()}
    return node


def _walk(node: Mapping[str, Any], prefix: str) -> Iterator[tuple[str, str]]:
    for key, value in node.items():
        full_key = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from _walk(value, full_key)
        elif isinstance(value, str):
            yield full_key, value


def flatten_catalog(tree: Mapping[str, Any]) -> dict[str, str]:
    """Flatten a nested catalog into ``{dotted.path: message}``.

    Non-string leaves (numbers, lists, null) are dropped since they can never
    be resolved as messages.

    Example:
        flatten_catalog({"name": {"empty": "Required"}})
        # {"name.empty": "Required"}
    """
    return dict(sorted(_walk(tree, "")))


def unflatten_catalog(flat: Mapping[str, str]) -> dict[str, Any]:
    """Rebuild a nested catalog from dotted keys.

    When a key is both a leaf and a prefix of other keys, the later entry in
    sorted order wins, which keeps the deeper branch.
    """
    root: dict[str, Any] = {}
    for key in sorted(flat):
        parts = key.split(PATH_SEPARATOR)
        current = root
        for part in parts[:-1]:
            child = current.get(part)
            if not isinstance(child, dict):
                child = {}
                current[part] = child
            current = child
        current[parts[-1]] = flat[key]
    return root
