"""CLI fixtures."""

from __future__ import annotations

import pytest
from rich.console import Console

from synlint.cli import main
from synlint.cli.commands import lint_cmd, rules_cmd, verify_cmd


@pytest.fixture(autouse=True)
def wide_consoles(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from wrapping table cells at the default 80 columns."""
    for module in (main, lint_cmd, rules_cmd, verify_cmd):
        monkeypatch.setattr(module, "console", Console(width=200))
    monkeypatch.setattr(lint_cmd, "err_console", Console(stderr=True, width=200))
