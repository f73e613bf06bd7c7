"""synlint CLI - Main entrypoint."""

import typer
from rich.console import Console

from synlint import __version__
from synlint.cli.commands import lint_cmd, rules_cmd, verify_cmd
from synlint.kernel.logging import configure_logging

app = typer.Typer(
    name="synlint",
    help="synlint - Static analysis rules for Swift anti-patterns.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command(name="lint", help="Lint Swift files and directories")(lint_cmd.lint)
app.command(name="rules", help="List the available rules")(rules_cmd.rules)
app.command(name="verify", help="Verify rules against their bundled examples")(verify_cmd.verify)


def _print_version(value: bool) -> None:
    if value:
        console.print(f"[bold blue]synlint[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """synlint CLI.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    effective_level = "debug" if verbose else log_level
    ctx.obj["log_level"] = effective_level
    if effective_level:
        configure_logging(level=effective_level.upper(), format="rich")  # type: ignore[arg-type]


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
