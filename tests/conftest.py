"""Shared pytest fixtures.

- swift_file: factory writing Swift sources under ``tmp_path``
- isolated_cwd: run from an empty directory with no config discovery leaks
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from synlint.compiler.config_loader import CONFIG_PATH_ENV_VAR


@pytest.fixture
def swift_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes ``source`` to ``tmp_path / name``."""

    def _write(source: str, name: str = "Sample.swift") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change into ``tmp_path`` and clear the config path override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    return tmp_path
