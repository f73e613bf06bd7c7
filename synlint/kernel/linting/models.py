"""Core models for the synlint rule engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter


class Severity(str, Enum):
    """Violation severity. Only these two values are valid in configuration."""

    WARNING = "warning"
    ERROR = "error"


class RuleKind(str, Enum):
    """Broad category a rule belongs to."""

    LINT = "lint"
    IDIOMATIC = "idiomatic"
    STYLE = "style"


@dataclass(frozen=True, slots=True)
class Finding:
    """Raw matcher output: where the anti-pattern is and why it is flagged."""

    position: int
    message: str


@dataclass(frozen=True, slots=True)
class Violation:
    """A single finding with its resolved severity."""

    rule_id: str
    position: int
    message: str
    severity: Severity


@dataclass(frozen=True, slots=True)
class FileFailure:
    """A file that could not be linted; none of its violations are in the report."""

    path: str
    message: str


class Collector:
    """Append-only violation sink owned by a single (file, rule) traversal."""

    __slots__ = ("_violations",)

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    def add(self, violation: Violation) -> None:
        self._violations.append(violation)

    def __len__(self) -> int:
        return len(self._violations)

    def drain(self) -> tuple[Violation, ...]:
        """Return the collected violations ordered by position and empty the collector.

        The sort is stable, so violations sharing a position keep the order
        in which they were appended.
        """
        drained = tuple(sorted(self._violations, key=attrgetter("position")))
        self._violations.clear()
        return drained


class LintReport:
    """Aggregated lint results across rules and files."""

    __slots__ = ("_by_path", "_sources", "_failures")

    def __init__(self) -> None:
        """Initialize an empty lint report."""
        self._by_path: dict[str, list[Violation]] = {}
        self._sources: dict[str, str] = {}
        self._failures: list[FileFailure] = []

    def add(self, violation: Violation, path: str = "<source>") -> None:
        """Add a violation found in ``path`` to the report."""
        self._by_path.setdefault(path, []).append(violation)

    def extend(self, violations: Iterable[Violation], path: str = "<source>") -> None:
        bucket = self._by_path.setdefault(path, [])
        bucket.extend(violations)

    def set_source(self, path: str, source: str) -> None:
        """Remember the text ``path`` was linted from, for line/column lookups."""
        self._sources[path] = source

    def source_for(self, path: str) -> str | None:
        return self._sources.get(path)

    def add_failure(self, failure: FileFailure) -> None:
        self._failures.append(failure)

    def merge(self, other: LintReport) -> None:
        """Append everything from ``other`` (violations, sources and failures)."""
        for path in other.paths:
            self.extend(other.violations_for(path), path)
        self._sources.update(other._sources)
        self._failures.extend(other._failures)

    @property
    def failures(self) -> list[FileFailure]:
        """Files that could not be read or parsed, in the order they were recorded."""
        return list(self._failures)

    @property
    def has_failures(self) -> bool:
        return bool(self._failures)

    @property
    def paths(self) -> list[str]:
        """Paths that were added to the report, in insertion order."""
        return list(self._by_path)

    def violations_for(self, path: str) -> list[Violation]:
        return list(self._by_path.get(path, []))

    @property
    def violations(self) -> list[Violation]:
        """All violations."""
        return [v for bucket in self._by_path.values() for v in bucket]

    @property
    def errors(self) -> list[Violation]:
        """Violations with severity 'error'."""
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        """Violations with severity 'warning'."""
        return [v for v in self.violations if v.severity is Severity.WARNING]

    @property
    def is_clean(self) -> bool:
        """True if no violations were found."""
        return not any(self._by_path.values())

    @property
    def has_errors(self) -> bool:
        """True if any error-level violations exist."""
        return any(v.severity is Severity.ERROR for v in self.violations)
