"""Built-in rule catalog."""

from synlint.kernel.linting.registry import RuleRegistry
from synlint.kernel.linting.rules import Rule

from .backend_id_manipulation import BackendIDManipulationRule
from .date_formatter_override import DateFormatterOverrideRule
from .locale_override import LocaleOverrideRule
from .serializable_event import SerializableEventRule
from .unused_enumerated import UnusedEnumeratedRule
from .xct_specific_matcher import XCTSpecificMatcherRule

ALL_RULES: tuple[Rule, ...] = (
    BackendIDManipulationRule(),
    UnusedEnumeratedRule(),
    DateFormatterOverrideRule(),
    LocaleOverrideRule(),
    SerializableEventRule(),
    XCTSpecificMatcherRule(),
)


def default_registry() -> RuleRegistry:
    """Registry holding every built-in rule."""
    return RuleRegistry(ALL_RULES)


__all__ = [
    "ALL_RULES",
    "BackendIDManipulationRule",
    "DateFormatterOverrideRule",
    "LocaleOverrideRule",
    "SerializableEventRule",
    "UnusedEnumeratedRule",
    "XCTSpecificMatcherRule",
    "default_registry",
]
