"""Front end for synlint.

Turns Swift source into syntax trees and configuration files into
:class:`~synlint.kernel.config.models.LintConfig`.
"""

from .config_loader import ConfigLoader, get_default_config, load_config
from .swift_parser import SwiftParser, parse_file, parse_source

__all__ = [
    "ConfigLoader",
    "SwiftParser",
    "get_default_config",
    "load_config",
    "parse_file",
    "parse_source",
]
