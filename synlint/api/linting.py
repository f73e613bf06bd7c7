"""Linting API.

Provides the entry points used by the CLI (and by anything embedding
synlint): lint a source string, one file, or a set of files and directories.

Examples
--------
>>> from synlint.api.linting import lint_source
>>> report = lint_source("let locale = Locale.current")
>>> [v.rule_id for v in report.violations]
['locale_override']
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from synlint.compiler.swift_parser import parse_source
from synlint.kernel.config.models import LintConfig
from synlint.kernel.exceptions import ParseError, SourceReadError
from synlint.kernel.linting.models import FileFailure, LintReport, Violation
from synlint.kernel.linting.rules import Rule, run_rules
from synlint.kernel.logging import get_logger
from synlint.kernel.syntax.nodes import SyntaxTree, line_and_column
from synlint.stdlib.rules import default_registry

logger = get_logger(__name__)

SWIFT_SUFFIX = ".swift"


def _active_rules(rules: Sequence[Rule] | None, config: LintConfig | None) -> list[Rule]:
    if rules is not None:
        return [rule for rule in rules if config is None or config.is_enabled(rule.rule_id)]
    return default_registry().select(config)


def lint_tree(
    tree: SyntaxTree,
    rules: Sequence[Rule] | None = None,
    config: LintConfig | None = None,
    path: str = "<source>",
) -> LintReport:
    """Run the active rules over an already parsed tree.

    The report keeps the tree's source text so callers can resolve
    positions without reading the file again.
    """
    report = run_rules(_active_rules(rules, config), tree, config, path)
    report.set_source(path, tree.source)
    return report


def lint_source(
    source: str,
    rules: Sequence[Rule] | None = None,
    config: LintConfig | None = None,
    path: str = "<source>",
) -> LintReport:
    """Parse and lint Swift source text.

    Parameters
    ----------
    source : str
        Swift source code
    rules : Sequence[Rule] | None
        Rules to run; defaults to the built-in catalog
    config : LintConfig | None
        Rule selection and severity overrides
    path : str
        Name the violations are filed under in the report

    Returns
    -------
    LintReport
        Violations grouped under ``path``

    Raises
    ------
    ParseError
        If the source cannot be parsed
    """
    return lint_tree(parse_source(source), rules, config, path)


def lint_file(
    path: str | Path,
    rules: Sequence[Rule] | None = None,
    config: LintConfig | None = None,
) -> LintReport:
    """Read, parse and lint one Swift file.

    Raises
    ------
    SourceReadError
        If the file cannot be read or is not valid UTF-8
    ParseError
        If the file cannot be parsed; the error carries the file path
    """
    path = Path(path)
    logger.debug("Linting {path}", path=str(path))
    try:
        source = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(str(path), f"invalid UTF-8 at byte {e.start}") from e
    except OSError as e:
        raise SourceReadError(str(path), e.strerror or str(e)) from e
    try:
        return lint_source(source, rules, config, str(path))
    except ParseError as e:
        raise ParseError(e.message, e.position, str(path)) from e


def collect_swift_files(paths: Iterable[str | Path]) -> list[Path]:
    """Expand directories into their ``*.swift`` files (sorted), keeping file order.

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(p for p in path.rglob(f"*{SWIFT_SUFFIX}") if p.is_file())
        elif path.exists():
            candidates = [path]
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                files.append(candidate)
    return files


def _lint_isolated(
    path: Path, rules: Sequence[Rule], config: LintConfig | None
) -> LintReport:
    """Lint one file, turning a read or parse failure into a recorded FileFailure."""
    try:
        return lint_file(path, rules, config)
    except (ParseError, SourceReadError) as e:
        logger.info("Skipping {path}: {error}", path=str(path), error=str(e))
        report = LintReport()
        report.add_failure(FileFailure(path=str(path), message=str(e)))
        return report


def lint_paths(
    paths: Iterable[str | Path],
    rules: Sequence[Rule] | None = None,
    config: LintConfig | None = None,
    jobs: int = 1,
) -> LintReport:
    """Lint files and directories, merging results in input order.

    With ``jobs > 1`` files are linted on a thread pool. Each file gets its
    own traversal (and collector), so the merged report is identical to a
    sequential run.

    A file that cannot be read or parsed does not stop the run: it is
    recorded in :attr:`LintReport.failures` and the remaining files are
    still linted.

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    """
    files = collect_swift_files(paths)
    active = _active_rules(rules, config)
    logger.info(
        "Linting {files} file(s) with {rules} rule(s)", files=len(files), rules=len(active)
    )

    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            reports = list(executor.map(lambda f: _lint_isolated(f, active, config), files))
    else:
        reports = [_lint_isolated(f, active, config) for f in files]

    merged = LintReport()
    for report in reports:
        merged.merge(report)
    return merged


def violation_to_dict(
    violation: Violation, path: str = "<source>", source: str | None = None
) -> dict[str, Any]:
    """JSON-friendly rendering of a violation; line/column need the source text."""
    record: dict[str, Any] = {
        "path": path,
        "rule_id": violation.rule_id,
        "severity": violation.severity.value,
        "message": violation.message,
        "position": violation.position,
    }
    if source is not None:
        record["line"], record["column"] = line_and_column(source, violation.position)
    return record
