"""List the rule catalog."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from synlint.stdlib.rules import default_registry

console = Console()


def rules(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show example counts"),
    ] = False,
) -> None:
    """Show every available rule with its kind and default severity."""
    table = Table(title="Rules", show_header=True, border_style="dim")
    table.add_column("Identifier", style="cyan")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Severity")
    table.add_column("Description", style="dim")
    if verbose:
        table.add_column("Examples", justify="right")

    for rule in default_registry():
        row = [
            rule.rule_id,
            rule.name,
            rule.kind.value,
            rule.default_severity.value,
            rule.description,
        ]
        if verbose:
            metadata = rule.metadata
            row.append(
                f"{len(metadata.non_triggering_examples)}/{len(metadata.triggering_examples)}"
            )
        table.add_row(*row)

    console.print(table)
