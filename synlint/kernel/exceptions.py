"""Core exception hierarchy for synlint.

All synlint exceptions inherit from SynlintError for easy exception handling.
A node that does not match a rule's pattern is never an exception: matchers
simply produce no findings.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class SynlintError(Exception):
    """Base exception for all synlint errors.

    Catch this to handle all synlint-specific failures.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SynlintError):
    """Raised when lint configuration is invalid.

    Configuration errors are fatal and surface before any file is analysed.

    Examples
    --------
    Example usage::

        raise ConfigurationError("rules.locale_override", "unknown severity 'fatal'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Configuration key (or file) that is invalid
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


# ============================================================================
# Rule Catalog Errors
# ============================================================================


class RuleDefinitionError(SynlintError):
    """Raised when a rule's static metadata is invalid.

    Examples
    --------
    Example usage::

        raise RuleDefinitionError("unused_enumerated", "identifier already registered")
    """

    def __init__(self, rule_id: str, reason: str) -> None:
        super().__init__(f"Invalid rule '{rule_id}': {reason}")
        self.rule_id = rule_id
        self.reason = reason


# ============================================================================
# Front End Errors
# ============================================================================


class ParseError(SynlintError):
    """Raised when source text cannot be turned into a syntax tree.

    Attributes
    ----------
    position : int
        UTF-8 byte offset where parsing failed
    path : str | None
        File being parsed, when known
    """

    def __init__(self, message: str, position: int, path: str | None = None) -> None:
        location = f"{path}, byte {position}" if path else f"byte {position}"
        super().__init__(f"{message} (at {location})")
        self.message = message
        self.position = position
        self.path = path


class SourceReadError(SynlintError):
    """Raised when a source file cannot be read or is not valid UTF-8.

    Examples
    --------
    Example usage::

        raise SourceReadError("Sources/App.swift", "invalid UTF-8 at byte 8")
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason
