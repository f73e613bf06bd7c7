"""synlint - static analysis rules for Swift anti-patterns.

Rules are small matchers over a parsed syntax tree; each ships with
annotated examples that double as its test suite.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("synlint")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

__all__ = ["__version__"]
