"""Configuration loader for synlint.

Parses configuration files into :class:`~synlint.kernel.config.models.LintConfig`.
Supported sources:

1. **YAML** (``.synlint.yml`` / ``.synlint.yaml``): a plain mapping, with the
   settings either at the top level or under a ``synlint`` key.
2. **pyproject.toml [tool.synlint]**: discovery fallback, walking up from the
   working directory.

The kernel never touches file formats; it only sees the validated model.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from synlint.kernel.config.models import LintConfig
from synlint.kernel.exceptions import ConfigurationError
from synlint.kernel.logging import get_logger

CONFIG_PATH_ENV_VAR = "SYNLINT_CONFIG_PATH"
CONFIG_FILE_NAMES = (".synlint.yml", ".synlint.yaml")

logger = get_logger(__name__)


class ConfigLoader:
    """Finds, reads and validates synlint configuration files."""

    def __init__(self, known_rule_ids: Iterable[str] | None = None) -> None:
        self.known_rule_ids = frozenset(known_rule_ids) if known_rule_ids is not None else None

    def load(self, path: str | Path | None = None) -> LintConfig:
        """Load configuration from ``path`` or the discovery order.

        Parameters
        ----------
        path : str | Path | None
            Path to a config file. If None, searches using discovery order.

        Returns
        -------
        LintConfig
            Validated configuration

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If the file is malformed or references unknown rules
        """
        config_path = self._find_config_file(path)
        logger.info("Loading configuration from {path}", path=str(config_path))

        if config_path.suffix in (".yaml", ".yml"):
            data = self._read_yaml(config_path)
        else:
            data = self._read_toml(config_path)
        return self.parse(data, source=config_path.name)

    def parse(self, data: dict[str, Any], source: str = "<config>") -> LintConfig:
        """Validate raw configuration data (format-agnostic).

        Raises
        ------
        ConfigurationError
            If validation fails or an unknown rule identifier is referenced
        """
        try:
            config = LintConfig.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigurationError(source, problems) from e

        if self.known_rule_ids is not None:
            config.check_rule_ids(self.known_rule_ids)
        logger.debug(
            "Loaded configuration: {count} rule override(s), {disabled} disabled",
            count=len(config.rules),
            disabled=len(config.disabled_rules),
        )
        return config

    def _read_yaml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(config_path.name, f"invalid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                config_path.name, f"expected a mapping, got {type(data).__name__}"
            )
        section = data.get("synlint", data)
        if not isinstance(section, dict):
            raise ConfigurationError(config_path.name, "'synlint' must be a mapping")
        return section

    def _read_toml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(config_path.name, f"invalid TOML: {e}") from e

        section = data.get("tool", {}).get("synlint")
        if section is None:
            if config_path.name == "pyproject.toml":
                logger.warning("No [tool.synlint] section found in pyproject.toml, using defaults")
                return {}
            # A dedicated TOML file may hold the settings at top level
            return data
        return section

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find the configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``SYNLINT_CONFIG_PATH`` env var
        3. ``.synlint.yml`` / ``.synlint.yaml`` in CWD
        4. ``pyproject.toml`` with ``[tool.synlint]`` in CWD or a parent directory

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If a ``pyproject.toml`` met during discovery is not valid TOML
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv(CONFIG_PATH_ENV_VAR):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from {var}: {path}", var=CONFIG_PATH_ENV_VAR, path=str(config_path))
                return config_path
            logger.warning("{var} set but file not found: {path}", var=CONFIG_PATH_ENV_VAR, path=str(config_path))

        for name in CONFIG_FILE_NAMES:
            if Path(name).exists():
                return Path(name)

        current = Path.cwd()
        while True:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                try:
                    with pyproject.open("rb") as f:
                        data = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigurationError(str(pyproject), f"invalid TOML: {e}") from e
                if "synlint" in data.get("tool", {}):
                    return pyproject
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Provide a path, set SYNLINT_CONFIG_PATH, "
            "add .synlint.yml, or add [tool.synlint] to pyproject.toml"
        )


def load_config(
    path: str | Path | None = None, known_rule_ids: Iterable[str] | None = None
) -> LintConfig:
    """Load configuration from file or return defaults.

    An explicit ``path`` that does not exist is an error; failing to
    discover any configuration is not.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search
    known_rule_ids : Iterable[str] | None
        When given, rule identifiers in the file are checked against it

    Returns
    -------
    LintConfig
        Loaded configuration or defaults if no file was found

    Raises
    ------
    ConfigurationError
        If the configuration is invalid
    """
    loader = ConfigLoader(known_rule_ids)
    try:
        return loader.load(path)
    except FileNotFoundError as e:
        if path:
            raise ConfigurationError("config", str(e)) from e
        logger.info("No configuration file found, using defaults")
        return get_default_config()


def get_default_config() -> LintConfig:
    """Configuration with every rule enabled at its default severity."""
    return LintConfig()
