#!/usr/bin/env python3
"""
Rule sets: one immutable bundle of tables and compiled patterns per supported
locale and numbering system.

A rule set runs the five pipeline stages in a fixed order:

    normalize -> numerals -> fractions -> magnitudes -> finalize

Every stage is a pure ``str -> str`` function, so a rule set can be shared
between threads without locking.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, NamedTuple

from . import constants
from .locales import LocaleChoice, NumberingSystem, coerce_locale, coerce_numbering_system
from .pipeline import (
    AdditionPatterns,
    FractionPatterns,
    MagnitudePatterns,
    NumeralPatterns,
    finalize,
    merge,
    normalize,
    rewrite_fractions,
    rewrite_magnitudes,
    rewrite_numerals,
)
from .pipeline.step1_normalize import trailing_article_pattern
from .pipeline.step3_fractions import DEFAULT_PRECISION
from .tables import RuleTables, load_rule_tables
from ..core.config import setup_logging
from ..exceptions import UnsupportedNumberingSystemError

logger = setup_logging(__name__)


class StageResult(NamedTuple):
    """The working text as it was after one pipeline stage."""

    stage: str
    text: str


@dataclass(frozen=True)
class RuleSet:
    """Immutable rule tables of one language with their precompiled patterns."""

    locale: LocaleChoice
    numbering_system: NumberingSystem
    tables: RuleTables
    trailing_article: re.Pattern[str]
    numerals: NumeralPatterns
    fractions: FractionPatterns
    magnitudes: MagnitudePatterns
    addition: AdditionPatterns

    @classmethod
    def from_tables(
        cls,
        tables: RuleTables,
        locale: LocaleChoice = LocaleChoice.EN,
        numbering_system: NumberingSystem = NumberingSystem.LATN,
        precision: int = DEFAULT_PRECISION,
    ) -> RuleSet:
        """Compile every pattern the stages need from the given tables."""
        if precision < 0:
            raise ValueError(f"precision must be non-negative, got {precision}")

        addition = AdditionPatterns.build(tables)
        fractions = FractionPatterns.build(tables, precision)
        return cls(
            locale=locale,
            numbering_system=numbering_system,
            tables=tables,
            trailing_article=trailing_article_pattern(tables.indefinite_articles),
            numerals=NumeralPatterns.build(tables),
            fractions=fractions,
            magnitudes=MagnitudePatterns.build(tables, addition, fractions),
            addition=addition,
        )

    @property
    def precision(self) -> int:
        return self.fractions.precision

    def normalize(self, text: str) -> str:
        return normalize(text, self.trailing_article)

    def rewrite_numerals(self, text: str) -> str:
        return rewrite_numerals(text, self.numerals)

    def rewrite_fractions(self, text: str) -> str:
        return rewrite_fractions(text, self.fractions)

    def rewrite_magnitudes(self, text: str) -> str:
        return rewrite_magnitudes(text, self.magnitudes)

    def merge(self, text: str) -> str:
        return merge(text, self.addition)

    def finalize(self, text: str) -> str:
        return finalize(text, self.tables.marker)

    def _stages(self) -> tuple[tuple[str, Callable[[str], str]], ...]:
        return (
            (constants.STAGE_NORMALIZE, self.normalize),
            (constants.STAGE_NUMERALS, self.rewrite_numerals),
            (constants.STAGE_FRACTIONS, self.rewrite_fractions),
            (constants.STAGE_MAGNITUDES, self.rewrite_magnitudes),
            (constants.STAGE_FINALIZE, self.finalize),
        )

    def process(self, text: str) -> str:
        """
        Replace every numeric expression in the text with its number.

        Text without any recognized word passes through the stages unchanged.
        """
        result = text
        for _stage, apply in self._stages():
            result = apply(result)
        return result

    def explain(self, text: str) -> list[StageResult]:
        """Run the pipeline and return the working text after every stage."""
        results = [StageResult(constants.STAGE_INPUT, text)]
        for stage, apply in self._stages():
            results.append(StageResult(stage, apply(results[-1].text)))
        return results


# Supported (locale, numbering system) pairs and the resource language they read
_REGISTRY: dict[tuple[LocaleChoice, NumberingSystem], str] = {
    (LocaleChoice.EN, NumberingSystem.LATN): "en",
}


def supported_choices() -> list[tuple[LocaleChoice, NumberingSystem]]:
    """List every (locale, numbering system) pair that has a rule set."""
    return list(_REGISTRY)


@lru_cache(maxsize=None)
def _build_rule_set(locale: LocaleChoice, numbering_system: NumberingSystem, precision: int) -> RuleSet:
    language = _REGISTRY[(locale, numbering_system)]
    logger.debug(f"Compiling rule set for {locale.value}/{numbering_system.value} (precision={precision})")
    return RuleSet.from_tables(load_rule_tables(language), locale, numbering_system, precision)


def get_rule_set(
    locale: LocaleChoice | str = LocaleChoice.EN,
    numbering_system: NumberingSystem | str = NumberingSystem.LATN,
    precision: int = DEFAULT_PRECISION,
) -> RuleSet:
    """
    Get the shared rule set for a locale and numbering system.

    Args:
        locale: A LocaleChoice or its code ("en")
        numbering_system: A NumberingSystem or its code ("latn")
        precision: Decimal places of mixed numbers ("one and a half" -> 1.500)

    Returns:
        The cached RuleSet

    Raises:
        UnsupportedLocaleError: If the locale is unknown
        UnsupportedNumberingSystemError: If no rule set writes numbers in the
            chosen numbering system
    """
    locale = coerce_locale(locale)
    numbering_system = coerce_numbering_system(numbering_system)
    if (locale, numbering_system) not in _REGISTRY:
        raise UnsupportedNumberingSystemError(numbering_system.value)
    return _build_rule_set(locale, numbering_system, precision)
