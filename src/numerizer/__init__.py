"""
Numerizer - turn numbers written out in words into numbers.

This package provides:
- Numerizer: a reusable converter bound to one locale and numbering system
- numerize(): one-off conversion with the configured defaults
- the `numerizer` command line tool
"""

__version__ = "1.0.0"

from .exceptions import (
    ConfigurationError,
    NumerizerError,
    UnsupportedLocaleError,
    UnsupportedNumberingSystemError,
)
from .numerization.locales import LocaleChoice, NumberingSystem
from .numerizer import Numerizer, numerize

__all__ = [
    "ConfigurationError",
    "LocaleChoice",
    "NumberingSystem",
    "Numerizer",
    "NumerizerError",
    "UnsupportedLocaleError",
    "UnsupportedNumberingSystemError",
    "numerize",
]
