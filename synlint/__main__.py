"""Entry point for running synlint as a module: python -m synlint [command]."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from synlint.cli.main import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
