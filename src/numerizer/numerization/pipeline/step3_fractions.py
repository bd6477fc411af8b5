#!/usr/bin/env python3
"""
Step 3 of the numerization pipeline: Fractions.

Resolves fractional words into ``numerator/denominator`` tokens:
- "a fifth" becomes ``1/5``
- a bare "fifths" becomes the fragment ``/5``, attached to a numerator
  immediately before it ("two fifths" -> ``2/5``)
- a whole number followed by a fraction becomes a decimal
  ("one and two thirds" -> ``1.667``)
- a fragment left without a numerator gets an implicit 1 ("half" -> ``1/2``)
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from ..patterns import compile_pattern, replace
from ..tables import RuleTables
from ...core.config import setup_logging

logger = setup_logging(__name__)

DEFAULT_PRECISION = 3


@dataclass(frozen=True)
class FractionPatterns:
    """Compiled patterns of the fraction step, built once per rule set."""

    marker: str
    with_article: tuple[tuple[re.Pattern[str], str], ...]
    bare: tuple[tuple[re.Pattern[str], int], ...]
    mixed_number: re.Pattern[str]
    unpreceded: re.Pattern[str]
    precision: int = DEFAULT_PRECISION

    @classmethod
    def build(cls, tables: RuleTables, precision: int = DEFAULT_PRECISION) -> FractionPatterns:
        marker = tables.marker
        escaped_marker = re.escape(marker)
        articles = "|".join(
            re.escape(article) for article in sorted(tables.indefinite_articles, key=len, reverse=True)
        )

        with_article = []
        bare = []
        for rule in tables.fractions:
            with_article.append((
                compile_pattern(rf"(?<!\w)(?:{articles})\s(?:{rule.pattern})(?!\w)"),
                f"{marker}1/{rule.value}",
            ))
            # Group 1 is the gap to a numerator digit right before the word
            bare.append((
                compile_pattern(rf"((?<=\d)(?:\s+|-))?(?<!\w)(?:{rule.pattern})(?!\w)"),
                rule.value,
            ))

        conjunction = re.escape(tables.conjunction)
        mixed_number = compile_pattern(
            rf"(?<![\d/.])(\d+)(?:\s|\s{conjunction}\s|-)+(?:{escaped_marker}|\s)*(\d+)\s*/\s*(\d+)"
        )
        unpreceded = compile_pattern(rf"{escaped_marker}/(\d+)")

        return cls(
            marker=marker,
            with_article=tuple(with_article),
            bare=tuple(bare),
            mixed_number=mixed_number,
            unpreceded=unpreceded,
            precision=precision,
        )


def _mixed_number(match: re.Match, precision: int) -> str:
    whole = float(match.group(1))
    numerator = float(match.group(2))
    denominator = float(match.group(3))
    if denominator == 0:
        return match.group(0)
    total = whole + numerator / denominator
    return f"{total:.{precision}f}"


def combine_mixed_numbers(text: str, patterns: FractionPatterns) -> str:
    """Turn a whole number followed by a fraction into a decimal ("1 and 2/5" -> 1.400)."""
    return replace(patterns.mixed_number, text, lambda match: _mixed_number(match, patterns.precision))


def rewrite_fractions(text: str, patterns: FractionPatterns) -> str:
    """
    Parse fractions from the given text.

    Args:
        text: Text produced by the numeral step
        patterns: Compiled fraction patterns of the active rule set

    Returns:
        Text with fractional words replaced by fractions or decimals
    """
    result = text
    marker = patterns.marker

    for (article_pattern, token), (bare_pattern, denominator) in zip(patterns.with_article, patterns.bare):
        result = replace(article_pattern, result, token)
        # Attached fragments have no marker of their own; loose ones keep one
        # so the implicit numerator below only ever touches our own fragments
        result = replace(
            bare_pattern,
            result,
            lambda match, d=denominator: f"/{d}" if match.group(1) else f"{marker}/{d}",
        )

    result = combine_mixed_numbers(result, patterns)

    result = replace(patterns.unpreceded, result, lambda match: f"{marker}1/{match.group(1)}")

    logger.debug(f"fractions: {text!r} -> {result!r}")
    return result
