#!/usr/bin/env python3
"""
Public entry points.

A ``Numerizer`` is bound to one locale and numbering system when it is
created, and replaces numeric words in any text with numbers:

    numerizer = Numerizer(locale="en")
    numerizer.numerize("forty two")
    # "42"
"""
from __future__ import annotations

from .core.config import get_config, setup_logging
from .core.logging import LogContext
from .numerization.locales import LocaleChoice, NumberingSystem
from .numerization.rule_set import RuleSet, StageResult, get_rule_set

logger = setup_logging(__name__)


class Numerizer:
    """Parses numeric words in a string and puts actual numbers in their place."""

    def __init__(
        self,
        locale: LocaleChoice | str | None = None,
        numbering_system: NumberingSystem | str | None = None,
        precision: int | None = None,
    ) -> None:
        """
        Args:
            locale: Language the text is written in; defaults to the configured
                ``numerizer.locale``
            numbering_system: Digits numbers are written with; defaults to the
                configured ``numerizer.numbering_system``
            precision: Decimal places of mixed numbers; defaults to the
                configured ``numerizer.precision``

        Raises:
            UnsupportedLocaleError: If the locale has no rule set
            UnsupportedNumberingSystemError: If the numbering system has no
                rule set for the locale
        """
        config = get_config()
        self.rule_set: RuleSet = get_rule_set(
            locale if locale is not None else config.locale,
            numbering_system if numbering_system is not None else config.numbering_system,
            precision if precision is not None else config.precision,
        )

    @property
    def locale(self) -> LocaleChoice:
        return self.rule_set.locale

    @property
    def numbering_system(self) -> NumberingSystem:
        return self.rule_set.numbering_system

    def numerize(self, text: str) -> str:
        """
        Change all numeric words in the text to numbers.

        Args:
            text: The text in which to replace numeric words with numbers

        Returns:
            A new string with the numeric words replaced with numbers
        """
        with LogContext(locale=self.locale.value, numbering_system=self.numbering_system.value):
            result = self.rule_set.process(text)
            logger.debug(f"numerize: {text!r} -> {result!r}")
        return result

    def explain(self, text: str) -> list[StageResult]:
        """Numerize the text and return the working text after every stage."""
        with LogContext(locale=self.locale.value, numbering_system=self.numbering_system.value):
            return self.rule_set.explain(text)

    def __repr__(self) -> str:
        return (
            f"Numerizer(locale={self.locale.value!r}, numbering_system={self.numbering_system.value!r}, "
            f"precision={self.rule_set.precision})"
        )


# Default instances, keyed on the resolved (locale, numbering system, precision)
_numerizer_instances: dict[tuple[str, str, int], Numerizer] = {}


def numerize(text: str, locale: LocaleChoice | str | None = None) -> str:
    """
    Change all numeric words in the text to numbers.

    This is the main entry point for one-off conversions; it reuses one
    Numerizer per locale and configured settings, so a newly loaded config
    takes effect on the next call.

    Args:
        text: The text in which to replace numeric words with numbers
        locale: Language of the text; defaults to the configured locale

    Returns:
        A new string with the numeric words replaced with numbers
    """
    config = get_config()
    if locale is None:
        locale = config.locale
    code = locale.value if isinstance(locale, LocaleChoice) else str(locale)
    key = (code.lower(), config.numbering_system.lower(), config.precision)

    numerizer = _numerizer_instances.get(key)
    if numerizer is None:
        numerizer = Numerizer(locale=locale, numbering_system=key[1], precision=key[2])
        _numerizer_instances[key] = numerizer
    return numerizer.numerize(text)
