"""JSON reporter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Sequence

from polyvalid.results import ValidationErrorSet

if TYPE_CHECKING:
    from polyvalid.batch import BatchResult
    from polyvalid.i18n.coverage import CoverageEntry


class JSONReporter:
    """Serializes results as JSON documents."""

    def __init__(self, indent: int | None = 2, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def _dump(self, payload: Any) -> str:
        return json.dumps(payload, ensure_ascii=False, indent=self.indent, sort_keys=self.sort_keys)

    def render(self, errors: ValidationErrorSet, message: str | None = None) -> str:
        """Render an error set, wrapped in the API envelope when ``message`` is given."""
        if message is not None:
            return self._dump(errors.to_response(message))
        return self._dump(errors.to_dict())

    def render_batch(self, result: "BatchResult") -> str:
        return self._dump({
            "summary": result.summary(),
            "errors": result.errors.to_dicts(),
        })

    def render_coverage(self, entries: Sequence["CoverageEntry"]) -> str:
        return self._dump([entry.to_dict() for entry in entries])
