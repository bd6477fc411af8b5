#!/usr/bin/env python3
"""
Step 4 of the numerization pipeline: Magnitude suffixes.

Multiplies the number before a suffix word (hundred, thousand, lakh, ...) by
the suffix value. Suffixes are processed smallest first, and an andition pass
follows each one, so by the time "million" is handled every smaller group
("one hundred and fifty five") has already been folded into a single token.

A fraction spoken after a magnitude ("one hundred and two fifths") can only
meet its whole number once the suffixes are multiplied out, so mixed numbers
are combined once more at the end.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from ..patterns import compile_pattern, replace
from ..tables import RuleTables
from ...core.config import setup_logging
from .andition import AdditionPatterns, merge
from .step3_fractions import FractionPatterns, combine_mixed_numbers

logger = setup_logging(__name__)

# A suffix may follow digits ("100thousand") but never other letters
NOT_AFTER_LETTER = r"(?<![^\W\d_])"
WORD_END = r"(?!\w)"


@dataclass(frozen=True)
class MagnitudePatterns:
    """Compiled patterns of the magnitude step, built once per rule set."""

    marker: str
    suffixes: tuple[tuple[re.Pattern[str], int], ...]
    addition: AdditionPatterns
    fractions: FractionPatterns | None = None

    @classmethod
    def build(
        cls,
        tables: RuleTables,
        addition: AdditionPatterns | None = None,
        fractions: FractionPatterns | None = None,
    ) -> MagnitudePatterns:
        marker = re.escape(tables.marker)
        # The base is an optional token or plain number right before the suffix,
        # never the tail of a fraction or a decimal
        suffixes = tuple(
            (
                compile_pattern(
                    rf"(?:(?:{marker})?(?<![\d./])(\d+(?:\.\d+)?)\s?)?"
                    rf"{NOT_AFTER_LETTER}(?:{rule.pattern}){WORD_END}"
                ),
                rule.value,
            )
            for rule in tables.magnitude_suffixes
        )
        return cls(
            marker=tables.marker,
            suffixes=suffixes,
            addition=addition or AdditionPatterns.build(tables),
            fractions=fractions,
        )


def _scale(base: str | None, value: int) -> str:
    if not base:
        return str(value)
    if "." not in base:
        return str(int(base) * value)

    total = Decimal(base) * value
    if total == total.to_integral_value():
        return str(int(total))
    return format(total.normalize(), "f")


def rewrite_magnitudes(text: str, patterns: MagnitudePatterns) -> str:
    """
    Parse numerals with magnitude suffixes from the given text.

    Args:
        text: Text produced by the fraction step
        patterns: Compiled magnitude patterns of the active rule set

    Returns:
        Text with suffixes multiplied out and adjacent parts summed
    """
    marker = patterns.marker

    # First andition, for the tens before the hundreds
    result = merge(text, patterns.addition)

    for pattern, value in patterns.suffixes:
        result = replace(pattern, result, lambda match, v=value: f"{marker}{_scale(match.group(1), v)}")
        result = merge(result, patterns.addition)

    # Final andition, for any conjunctions that remain
    result = merge(result, patterns.addition)

    if patterns.fractions is not None:
        result = combine_mixed_numbers(result, patterns.fractions)

    logger.debug(f"magnitudes: {text!r} -> {result!r}")
    return result
