"""Check every rule against its bundled examples."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from synlint.kernel.exceptions import ParseError
from synlint.kernel.linting.verification import RuleVerification, verify_rule
from synlint.stdlib.rules import default_registry

console = Console()


def verify(
    rule_ids: Annotated[
        list[str] | None,
        typer.Argument(help="Rules to verify (default: all)"),
    ] = None,
) -> None:
    """Run each rule over its triggering and non-triggering examples.

    Exits with status 1 when any example does not produce exactly the
    marked violations.
    """
    registry = default_registry()
    try:
        selected = [registry.get(rule_id) for rule_id in rule_ids] if rule_ids else list(registry)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(2) from e

    failed = False
    for rule in selected:
        try:
            verification = verify_rule(rule)
        except ParseError as e:
            console.print(f"[red]✗[/red] {rule.rule_id}: example does not parse: {e}")
            failed = True
            continue
        _print_verification(verification)
        failed = failed or not verification.passed

    if failed:
        raise typer.Exit(1)


def _print_verification(verification: RuleVerification) -> None:
    total = len(verification.results)
    if verification.passed:
        console.print(f"[green]✓[/green] {verification.rule_id} ({total} examples)")
        return
    console.print(
        f"[red]✗[/red] {verification.rule_id} "
        f"({len(verification.failures)} of {total} examples failed)"
    )
    for failure in verification.failures:
        console.print(f"    {failure.describe()}", markup=False, highlight=False, soft_wrap=True)
