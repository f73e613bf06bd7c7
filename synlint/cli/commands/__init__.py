"""CLI command modules."""

from . import lint_cmd, rules_cmd, verify_cmd

__all__ = ["lint_cmd", "rules_cmd", "verify_cmd"]
