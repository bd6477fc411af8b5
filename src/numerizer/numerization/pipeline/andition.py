#!/usr/bin/env python3
"""
Andition: merging adjacent numeric tokens into their sum.

Two tokens separated by whitespace or by the conjunction ("and") are parts of
the same number when:
- the separator is the conjunction ("one hundred and five"), or
- the first token has strictly more digits than the second
  ("nine hundred ninety nine" -> 900 + 99).

Equal-width neighbours ("five five") are left alone: they read as two
separate numbers. A fraction token never takes part in a sum; its numerator
is not an integer of its own.

The loop always terminates. A merge removes one token; a declined pair is
skipped by resuming the scan at its second token, so the scan position only
moves forward between merges.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from ..patterns import compile_pattern
from ..tables import RuleTables
from ...core.config import setup_logging

logger = setup_logging(__name__)


@dataclass(frozen=True)
class AdditionPatterns:
    """Compiled pattern of the andition loop, built once per rule set."""

    marker: str
    conjunction: str
    adjacent_tokens: re.Pattern[str]

    @classmethod
    def build(cls, tables: RuleTables) -> AdditionPatterns:
        marker = re.escape(tables.marker)
        conjunction = re.escape(tables.conjunction)
        # The second token may carry a decimal tail (90 + 1.400), never a denominator
        adjacent_tokens = compile_pattern(
            rf"{marker}(\d+)(\s|\s{conjunction}\s){marker}(\d+)(?![\w/])"
        )
        return cls(marker=tables.marker, conjunction=tables.conjunction, adjacent_tokens=adjacent_tokens)


def should_merge(first: str, separator: str, second: str, conjunction: str = "and") -> bool:
    """Decide whether two adjacent token values belong to the same number."""
    return separator.strip() == conjunction or len(first) > len(second)


def merge(text: str, patterns: AdditionPatterns) -> str:
    """
    Join numbers separated by spaces or the conjunction by adding them up if
    they match the addition criteria.

    Args:
        text: Text containing marked numeric tokens
        patterns: Compiled andition pattern of the active rule set

    Returns:
        Text in which no adjacent pair of tokens qualifies for merging
    """
    result = text
    position = 0
    merges = 0

    while True:
        match = patterns.adjacent_tokens.search(result, position)
        if match is None:
            break

        first, separator, second = match.group(1), match.group(2), match.group(3)
        if should_merge(first, separator, second, patterns.conjunction):
            total = int(first) + int(second)
            result = f"{result[:match.start()]}{patterns.marker}{total}{result[match.end():]}"
            merges += 1
            position = 0
        else:
            # Resume at the second token so it can still pair with its right neighbour
            position = match.start(3) - len(patterns.marker)

    if merges:
        logger.debug(f"andition: {text!r} -> {result!r} ({merges} merges)")
    return result
