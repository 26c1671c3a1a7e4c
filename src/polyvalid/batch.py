"""Batch validation of tabular records with Polars.

Every row of a frame is validated as one form submission. The result holds
one ``ValidationErrorSet`` per row plus a flat error frame that is easy to
filter, join or export.

Example:
    import polars as pl
    from polyvalid.batch import validate_records

    df = pl.DataFrame({
        "email": ["ada@example.org", "a@b.c"],
        "password": ["Str0ng!pass", "password"],
    })
    result = validate_records(df, "login", resolver)
    result.errors          # row, field, code, message, value
    result.failed_rows     # 1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import polars as pl

from polyvalid.exceptions import BatchInputError
from polyvalid.i18n.resolver import MessageResolver
from polyvalid.pipeline import ValidationPipeline
from polyvalid.results import ValidationErrorSet


ERROR_SCHEMA: dict[str, Any] = {
    "row": pl.Int64,
    "field": pl.Utf8,
    "code": pl.Utf8,
    "message": pl.Utf8,
    "value": pl.Utf8,
}


def load_records(path: str | Path) -> pl.DataFrame:
    """Load a records file based on extension.

    CSV columns are read as strings so values such as ``00012345`` keep
    their exact text.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        BatchInputError: If the file extension is not supported or the
            file cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = file_path.suffix.lower()
    readers = {
        ".csv": lambda p: pl.read_csv(p, infer_schema_length=0),
        ".json": pl.read_json,
        ".ndjson": pl.read_ndjson,
        ".jsonl": pl.read_ndjson,
        ".parquet": pl.read_parquet,
    }
    if suffix not in readers:
        raise BatchInputError(
            f"Unsupported file type: {suffix}. Supported: .csv, .json, .ndjson, .jsonl, .parquet"
        )

    try:
        return readers[suffix](file_path)
    except pl.exceptions.PolarsError as e:
        raise BatchInputError(f"Failed to read {file_path}: {e}") from e


def to_frame(data: Any) -> pl.DataFrame:
    """Convert supported inputs to an eager DataFrame."""
    if isinstance(data, pl.DataFrame):
        return data
    if isinstance(data, pl.LazyFrame):
        return data.collect()
    if isinstance(data, dict):
        return pl.DataFrame(data)
    if isinstance(data, list):
        return pl.DataFrame(data)
    if isinstance(data, (str, Path)):
        return load_records(data)
    raise BatchInputError(
        f"Unsupported input type: {type(data).__name__}. "
        "Supported types: pl.DataFrame, pl.LazyFrame, dict, list of dicts, file path"
    )


@dataclass
class BatchResult:
    """Outcome of validating many records."""

    form: str
    total_rows: int
    row_errors: list[ValidationErrorSet] = field(default_factory=list)
    errors: pl.DataFrame = field(default_factory=lambda: pl.DataFrame(schema=ERROR_SCHEMA))

    @property
    def failed_rows(self) -> int:
        return sum(1 for errors in self.row_errors if not errors.is_empty)

    @property
    def success(self) -> bool:
        return self.failed_rows == 0

    def failures_by_field(self) -> dict[str, int]:
        """Number of failing rows per field."""
        if self.errors.is_empty():
            return {}
        counts = self.errors.group_by("field").len().sort("field")
        return dict(zip(counts["field"].to_list(), counts["len"].to_list()))

    def summary(self) -> dict[str, Any]:
        return {
            "form": self.form,
            "total_rows": self.total_rows,
            "failed_rows": self.failed_rows,
            "passed_rows": self.total_rows - self.failed_rows,
            "failures_by_field": self.failures_by_field(),
        }


def validate_records(
    data: Any,
    form_name: str,
    messages: MessageResolver,
    pipeline: ValidationPipeline | None = None,
) -> BatchResult:
    """Validate every row of ``data`` as a ``form_name`` submission.

    Args:
        data: DataFrame, LazyFrame, dict of columns, list of records or file path
        form_name: Registered form whose fields are validated
        messages: Resolver bound to the output locale
        pipeline: Pipeline to use (default: sequential built-in pipeline)

    Raises:
        BatchInputError: If a form field has no column in the input.
        UnknownFormError: If the form is not registered.
    """
    pipeline = pipeline or ValidationPipeline(max_workers=0)
    fields = pipeline.registry.form_fields(form_name)
    df = to_frame(data)

    missing = [name for name in fields if name not in df.columns]
    if missing:
        raise BatchInputError(
            f"Input is missing column(s) {missing} required by form '{form_name}'. "
            f"Available: {df.columns}"
        )

    records = df.select([pl.col(name).cast(pl.Utf8) for name in fields])
    rows: dict[str, list[Any]] = {name: [] for name in ERROR_SCHEMA}
    row_errors: list[ValidationErrorSet] = []

    for index, record in enumerate(records.iter_rows(named=True)):
        errors = pipeline.validate_form(form_name, record, messages)
        row_errors.append(errors)
        for field_name, error in errors.entries():
            rows["row"].append(index)
            rows["field"].append(field_name)
            rows["code"].append(error.code)
            rows["message"].append(error.message)
            rows["value"].append(error.value)

    return BatchResult(
        form=form_name,
        total_rows=records.height,
        row_errors=row_errors,
        errors=pl.DataFrame(rows, schema=ERROR_SCHEMA),
    )
