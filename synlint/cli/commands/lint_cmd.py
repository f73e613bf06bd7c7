"""Swift linting command for synlint CLI."""

from __future__ import annotations

import json
from operator import attrgetter
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from synlint.api.linting import lint_paths, violation_to_dict
from synlint.compiler.config_loader import load_config
from synlint.kernel.exceptions import ConfigurationError
from synlint.kernel.linting.models import LintReport, Severity
from synlint.kernel.logging import configure_logging
from synlint.stdlib.rules import default_registry

console = Console()
err_console = Console(stderr=True)

_SEVERITY_RANK = {"error": 0, "warning": 1}
_SEVERITY_STYLE = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def lint(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Swift files or directories to lint", exists=True),
    ],
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to .synlint.yml or pyproject.toml"),
    ] = None,
    severity: Annotated[
        str,
        typer.Option("--severity", "-s", help="Minimum severity to report (error, warning)"),
    ] = "warning",
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
    disable: Annotated[
        str,
        typer.Option(
            "--disable",
            "-d",
            help="Comma-separated rule IDs to skip (e.g., unused_enumerated,locale_override)",
        ),
    ] = "",
    jobs: Annotated[
        int,
        typer.Option("--jobs", "-j", min=1, help="Number of files linted in parallel"),
    ] = 1,
) -> None:
    """Lint Swift sources against the rule catalog.

    Exit status is 0 when no error-severity violation is found, 1 when at
    least one is, and 2 when the configuration is invalid or any file could
    not be read or parsed. Files that fail are reported after the results of
    the files that were linted.

    Examples
    --------
    synlint lint Sources/
    synlint lint App.swift --severity error
    synlint lint Sources/ --format json --jobs 4
    synlint lint Sources/ --disable serializable_event
    """
    if severity not in _SEVERITY_RANK:
        err_console.print(f"[red]Invalid severity '{severity}'.[/red] Choose from: error, warning")
        raise typer.Exit(2)
    if output_format not in ("text", "json"):
        err_console.print(f"[red]Invalid format '{output_format}'.[/red] Choose from: text, json")
        raise typer.Exit(2)

    registry = default_registry()
    try:
        config = load_config(config_path, known_rule_ids=registry.ids)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e

    if not (ctx.obj or {}).get("log_level"):
        configure_logging(**config.logging.model_dump())

    disabled_ids = {r.strip() for r in disable.split(",") if r.strip()}
    if disabled_ids:
        unknown = disabled_ids - registry.ids
        if unknown:
            err_console.print(
                f"[yellow]Unknown rule ID(s): {', '.join(sorted(unknown))}[/yellow]  "
                f"Known: {', '.join(sorted(registry.ids))}"
            )
        config = config.model_copy(
            update={"disabled_rules": tuple(sorted(set(config.disabled_rules) | disabled_ids))}
        )

    report = lint_paths(paths, registry.select(config), config, jobs=jobs)

    min_rank = _SEVERITY_RANK[severity]
    records = _records(report, min_rank)

    if output_format == "json":
        _print_json(records)
    else:
        _print_text(records, report)

    for failure in report.failures:
        err_console.print(f"[red]Error:[/red] {escape(failure.message)}", highlight=False)

    if report.has_failures:
        raise typer.Exit(2)
    if report.has_errors:
        raise typer.Exit(1)


def _records(report: LintReport, min_rank: int) -> list[dict[str, Any]]:
    """Violations at or above the minimum severity, with line/column resolved."""
    records: list[dict[str, Any]] = []
    for path in report.paths:
        violations = sorted(
            (v for v in report.violations_for(path) if _SEVERITY_RANK[v.severity.value] <= min_rank),
            key=attrgetter("position"),
        )
        if not violations:
            continue
        source = report.source_for(path)
        records.extend(violation_to_dict(v, path, source) for v in violations)
    return records


def _print_text(records: list[dict[str, Any]], report: LintReport) -> None:
    """Print lint results as rich text."""
    console.print()

    files = len(report.paths)
    if not records:
        console.print(f"[green]No issues found[/green] in {files} file(s)")
        console.print()
        return

    console.print(
        f"[bold]{files} file(s)[/bold]  "
        f"[red]{len(report.errors)} error(s)[/red]  "
        f"[yellow]{len(report.warnings)} warning(s)[/yellow]"
    )
    console.print()

    table = Table(show_header=True, border_style="dim")
    table.add_column("Location", style="green")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity", width=8)
    table.add_column("Message")

    for record in records:
        style = _SEVERITY_STYLE[Severity(record["severity"])]
        table.add_row(
            f"{record['path']}:{record['line']}:{record['column']}",
            record["rule_id"],
            f"[{style}]{record['severity']}[/{style}]",
            record["message"],
        )

    console.print(table)
    console.print()


def _print_json(records: list[dict[str, Any]]) -> None:
    """Print lint results as JSON."""
    typer.echo(json.dumps(records, indent=2))
