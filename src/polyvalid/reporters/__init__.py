"""Reporters for validation results, batch results and catalog coverage."""

from polyvalid.reporters.console_reporter import ConsoleReporter, ConsoleReporterConfig
from polyvalid.reporters.json_reporter import JSONReporter

__all__ = [
    "ConsoleReporter",
    "ConsoleReporterConfig",
    "JSONReporter",
    "get_reporter",
]


def get_reporter(format: str, **kwargs):
    """Get a reporter by format name ("console" or "json")."""
    if format == "console":
        return ConsoleReporter(**kwargs)
    if format == "json":
        return JSONReporter(**kwargs)
    raise ValueError(f"Unknown reporter format: {format}. Available: console, json")
