"""Console/Terminal reporter.

Renders validation errors, batch results and catalog coverage with Rich.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from polyvalid.results import ValidationErrorSet

if TYPE_CHECKING:
    from polyvalid.batch import BatchResult
    from polyvalid.i18n.coverage import CoverageEntry


@dataclass
class ConsoleReporterConfig:
    """Configuration for console reporter.

    Attributes:
        color: Whether to use colors in output.
        width: Maximum width of output (None for auto).
        show_values: Whether to print the offending raw values.
        max_rows: Maximum error rows printed for batch results.
    """

    color: bool = True
    width: int | None = None
    show_values: bool = True
    max_rows: int = 50


class ConsoleReporter:
    """Console reporter for validation results.

    Example:
        >>> reporter = ConsoleReporter(color=False)
        >>> print(reporter.render(errors))
    """

    def __init__(self, config: ConsoleReporterConfig | None = None, **kwargs) -> None:
        self._config = config or ConsoleReporterConfig(**kwargs)

    def _create_console(self, capture: bool = True) -> Console:
        return Console(
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
            record=capture,
            file=StringIO() if capture else None,
        )

    def _errors_table(self, errors: ValidationErrorSet) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Field", style="cyan")
        table.add_column("Code", style="magenta")
        table.add_column("Message")
        if self._config.show_values:
            table.add_column("Value", style="dim")

        for field_name, error in errors.entries():
            row = [Text(field_name), Text(error.code), Text(error.message)]
            if self._config.show_values:
                row.append(Text(str(error.value)))
            table.add_row(*row)
        return table

    def _render_errors(self, console: Console, errors: ValidationErrorSet) -> None:
        if errors.is_empty:
            console.print(Text("PASSED", style="bold green"))
            return
        console.print(Text(f"FAILED ({len(errors)} field(s))", style="bold red"))
        console.print(self._errors_table(errors))

    def _render_batch(self, console: Console, result: "BatchResult") -> None:
        status_style = "green" if result.success else "red"
        header = Text()
        header.append("Form: ", style="dim")
        header.append(f"{result.form}\n", style="cyan")
        header.append("Rows: ", style="dim")
        header.append(f"{result.total_rows}\n")
        header.append("Failed: ", style="dim")
        header.append(str(result.failed_rows), style=f"bold {status_style}")
        console.print(Panel(header, title="Batch validation", expand=False))

        if result.errors.is_empty():
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Row", justify="right")
        table.add_column("Field", style="cyan")
        table.add_column("Message")
        for record in result.errors.head(self._config.max_rows).iter_rows(named=True):
            table.add_row(
                str(record["row"]), Text(record["field"]), Text(record["message"])
            )
        console.print(table)
        hidden = result.errors.height - self._config.max_rows
        if hidden > 0:
            console.print(Text(f"... {hidden} more error(s)", style="dim"))

    def _render_coverage(self, console: Console, entries: Sequence["CoverageEntry"]) -> None:
        table = Table(show_header=True, header_style="bold", title="Catalog coverage")
        table.add_column("Locale", style="cyan")
        table.add_column("Namespace")
        table.add_column("Translated", justify="right")
        table.add_column("Missing")
        table.add_column("Extra", style="dim")
        for entry in entries:
            style = "green" if entry.complete else "yellow"
            table.add_row(
                entry.locale.value,
                entry.namespace.value,
                Text(f"{entry.translated}/{entry.reference_keys} ({entry.ratio:.0%})", style=style),
                Text(", ".join(entry.missing) or "-"),
                Text(", ".join(entry.extra) or "-"),
            )
        console.print(table)

    def render(self, errors: ValidationErrorSet) -> str:
        console = self._create_console()
        self._render_errors(console, errors)
        return console.export_text()

    def render_batch(self, result: "BatchResult") -> str:
        console = self._create_console()
        self._render_batch(console, result)
        return console.export_text()

    def render_coverage(self, entries: Sequence["CoverageEntry"]) -> str:
        console = self._create_console()
        self._render_coverage(console, entries)
        return console.export_text()

    def print(self, errors: ValidationErrorSet) -> None:
        self._render_errors(self._create_console(capture=False), errors)

    def print_batch(self, result: "BatchResult") -> None:
        self._render_batch(self._create_console(capture=False), result)

    def print_coverage(self, entries: Sequence["CoverageEntry"]) -> None:
        self._render_coverage(self._create_console(capture=False), entries)
