#!/usr/bin/env python3
"""Exceptions raised while selecting or configuring a numerizer."""
from __future__ import annotations


class NumerizerError(Exception):
    """Base class for errors surfaced to callers of the numerizer."""
    pass


class UnsupportedLocaleError(NumerizerError):
    """Raised when the chosen locale does not have an associated rule set."""

    def __init__(self, locale: object) -> None:
        self.locale = locale
        super().__init__(f"Unsupported locale: {locale!r}")


class UnsupportedNumberingSystemError(NumerizerError):
    """Raised when the chosen numbering system does not have an associated rule set."""

    def __init__(self, numbering_system: object) -> None:
        self.numbering_system = numbering_system
        super().__init__(f"Unsupported numbering system: {numbering_system!r}")


class ConfigurationError(Exception):
    """Raised when there's a configuration issue that prevents safe operation."""
    pass
