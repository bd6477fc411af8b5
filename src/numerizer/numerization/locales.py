#!/usr/bin/env python3
"""Locale and numbering-system choices that select a rule set."""
from __future__ import annotations

from enum import Enum

from ..exceptions import UnsupportedLocaleError, UnsupportedNumberingSystemError


class LocaleChoice(str, Enum):
    """Languages numeric words can be read in."""

    EN = "en"  # International English, the default


class NumberingSystem(str, Enum):
    """
    Numbering systems numbers can be written out in.

    See the Unicode CLDR list of numbering systems for the codes.
    """

    LATN = "latn"  # Latin digits 0-9, the default
    ROMAN = "roman"


def coerce_locale(locale: LocaleChoice | str) -> LocaleChoice:
    """Turn a locale code into a LocaleChoice, rejecting unknown codes."""
    if isinstance(locale, LocaleChoice):
        return locale
    try:
        return LocaleChoice(str(locale).lower())
    except ValueError:
        raise UnsupportedLocaleError(locale) from None


def coerce_numbering_system(numbering_system: NumberingSystem | str) -> NumberingSystem:
    """Turn a numbering system code into a NumberingSystem, rejecting unknown codes."""
    if isinstance(numbering_system, NumberingSystem):
        return numbering_system
    try:
        return NumberingSystem(str(numbering_system).lower())
    except ValueError:
        raise UnsupportedNumberingSystemError(numbering_system) from None
