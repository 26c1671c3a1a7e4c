"""Command-line interface for polyvalid."""

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from polyvalid.batch import validate_records
from polyvalid.config import EngineConfig
from polyvalid.engine import ValidationEngine, build_engine
from polyvalid.exceptions import PolyvalidError
from polyvalid.i18n.catalog import flatten_catalog
from polyvalid.i18n.coverage import catalog_coverage
from polyvalid.reporters import ConsoleReporter, JSONReporter
from polyvalid.types import Locale, Namespace

app = typer.Typer(
    name="polyvalid",
    help="Multi-locale field validation with localized error messages",
    add_completion=False,
)

catalog_app = typer.Typer(
    name="catalog",
    help="Inspect message catalogs",
)
app.add_typer(catalog_app, name="catalog")


LocalesDirOption = Annotated[
    Optional[Path],
    typer.Option("--locales-dir", help="Catalog root directory (default: bundled catalogs)"),
]
LanguageOption = Annotated[
    Optional[str],
    typer.Option("--accept-language", "-l", help="Language preference, e.g. 'id-ID,en;q=0.8'"),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (console, json)"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging for every command."""
    level = "DEBUG" if verbose else os.getenv("POLYVALID_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        typer.echo(f"Error: Invalid POLYVALID_LOG_LEVEL '{level}'", err=True)
        raise typer.Exit(2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _engine(locales_dir: Optional[Path] = None, workers: Optional[int] = None) -> ValidationEngine:
    try:
        config = EngineConfig.from_env()
        if locales_dir is not None:
            config = config.replace(locales_dir=locales_dir)
        if workers is not None:
            config = config.replace(max_workers=workers)
    except PolyvalidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    return build_engine(config)


def _parse_fields(fields: list[str]) -> dict[str, str]:
    data: dict[str, str] = {}
    for item in fields:
        name, sep, value = item.partition("=")
        if not sep or not name:
            typer.echo(f"Error: Expected NAME=VALUE, got '{item}'", err=True)
            raise typer.Exit(2)
        data[name.strip()] = value
    return data


@app.command(name="validate")
def validate_cmd(
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", help="Field to validate as NAME=VALUE (repeatable)"),
    ] = None,
    form: Annotated[
        Optional[str],
        typer.Option("--form", help="Registered form (register, login); default: the given fields"),
    ] = None,
    accept_language: LanguageOption = None,
    format: FormatOption = "console",
    locales_dir: LocalesDirOption = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", help="Worker threads (0 or 1 = sequential)"),
    ] = None,
) -> None:
    """Validate field values and print localized errors."""
    if not field and not form:
        typer.echo("Error: Provide at least one --field or a --form", err=True)
        raise typer.Exit(2)

    engine = _engine(locales_dir, workers)
    data = _parse_fields(field or [])

    try:
        if form:
            errors = engine.validate_form(form, data, accept_language)
        else:
            errors = engine.validate_fields(list(data.items()), accept_language)
    except PolyvalidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if format == "json":
        typer.echo(JSONReporter().render(errors))
    else:
        ConsoleReporter().print(errors)

    if not errors.is_empty:
        raise typer.Exit(1)


@app.command(name="check")
def check_cmd(
    file: Annotated[Path, typer.Argument(help="Records file (CSV, JSON, NDJSON, Parquet)")],
    form: Annotated[str, typer.Option("--form", help="Registered form to validate each row as")],
    accept_language: LanguageOption = None,
    format: FormatOption = "console",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the error rows to this CSV file"),
    ] = None,
    locales_dir: LocalesDirOption = None,
) -> None:
    """Validate every record of a file against a form."""
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(2)

    engine = _engine(locales_dir)
    try:
        result = validate_records(
            file, form, engine.resolver(accept_language), pipeline=engine.pipeline
        )
    except PolyvalidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if output:
        result.errors.write_csv(output)
        typer.echo(f"Errors written to {output}")

    if format == "json":
        typer.echo(JSONReporter().render_batch(result))
    else:
        ConsoleReporter().print_batch(result)

    if not result.success:
        raise typer.Exit(1)


@app.command(name="resolve")
def resolve_cmd(
    namespace: Annotated[Namespace, typer.Argument(help="Message namespace")],
    path: Annotated[str, typer.Argument(help="Dotted message path, e.g. email.invalid")],
    default: Annotated[str, typer.Option("--default", "-d", help="Fallback text")] = "",
    accept_language: LanguageOption = None,
    locales_dir: LocalesDirOption = None,
) -> None:
    """Print a resolved message."""
    engine = _engine(locales_dir)
    typer.echo(engine.resolver(accept_language).resolve(namespace, path, default))


@catalog_app.command(name="coverage")
def coverage_cmd(
    reference: Annotated[
        Locale, typer.Option("--reference", help="Reference locale")
    ] = Locale.EN,
    format: FormatOption = "console",
    locales_dir: LocalesDirOption = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 if any key is missing"),
    ] = False,
) -> None:
    """Report missing and extra catalog keys per locale."""
    engine = _engine(locales_dir)
    entries = catalog_coverage(engine.catalogs, reference=reference)

    if format == "json":
        typer.echo(JSONReporter().render_coverage(entries))
    else:
        ConsoleReporter().print_coverage(entries)

    if strict and not all(entry.complete for entry in entries):
        raise typer.Exit(1)


@catalog_app.command(name="flatten")
def flatten_cmd(
    locale: Annotated[Locale, typer.Argument(help="Locale code")],
    namespace: Annotated[Namespace, typer.Argument(help="Message namespace")],
    locales_dir: LocalesDirOption = None,
) -> None:
    """Print the dotted keys and messages of one catalog."""
    engine = _engine(locales_dir)
    catalog = engine.catalogs.get_catalog(locale, namespace)
    for key, message in flatten_catalog(catalog.to_dict()).items():
        typer.echo(f"{key}\t{message}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
