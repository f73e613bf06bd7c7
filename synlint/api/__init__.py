"""Public API for synlint.

Shared by the CLI and by tools embedding the linter::

    from synlint import api

    report = api.linting.lint_paths(["Sources/"], jobs=4)
"""

from synlint.api import linting

__all__ = ["linting"]
