#!/usr/bin/env python3
"""
Step 2 of the numerization pipeline: Numerals.

Resolves cardinal number words into marked numeric tokens. Every rule only
matches whole words: the match must be preceded and followed by the start or
end of the text or by a non-word character.

Order matters:
1. Implicit hundreds ("two nineteen" -> "two hundred nineteen") run first so
   the inserted "hundred" is left for the magnitude step.
2. Direct numbers and single digits are replaced.
3. Remaining indefinite articles become 1.
4. Tens prefixes are resolved last, compounds ("twentytwo") before bare
   prefixes, so already tokenized text is never converted twice.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from ..patterns import compile_pattern, replace
from ..tables import RuleTables
from ...core.config import setup_logging

logger = setup_logging(__name__)

# Whole-word delimiters
WORD_START = r"(?<!\w)"
WORD_END = r"(?!\w)"


@dataclass(frozen=True)
class NumeralPatterns:
    """Compiled patterns of the numeral step, built once per rule set."""

    implicit_hundreds: re.Pattern[str]
    hundred: str
    simple: tuple[tuple[re.Pattern[str], str], ...]
    article: re.Pattern[str]
    article_token: str
    tens: tuple[tuple[re.Pattern[str], str], ...]

    @classmethod
    def build(cls, tables: RuleTables) -> NumeralPatterns:
        marker = tables.marker

        single_digits = tables.alternation(tables.single_digits)
        addenda = "|".join(
            (tables.alternation(tables.tens_prefixes), tables.alternation(tables.direct_numbers))
        )
        implicit_hundreds = compile_pattern(
            rf"{WORD_START}({single_digits})\s({addenda}){WORD_END}"
        )

        simple = tuple(
            (compile_pattern(rf"{WORD_START}{rule.pattern}{WORD_END}"), f"{marker}{rule.value}")
            for rule in tables.numerals
        )

        articles = "|".join(
            re.escape(article) for article in sorted(tables.indefinite_articles, key=len, reverse=True)
        )
        article = compile_pattern(rf"{WORD_START}(?:{articles}){WORD_END}")

        # Compounds for each prefix come before the bare prefix
        tens: list[tuple[re.Pattern[str], str]] = []
        for prefix in tables.tens_prefixes:
            for digit in tables.single_digits:
                tens.append((
                    compile_pattern(rf"{WORD_START}{prefix.pattern}{digit.pattern}{WORD_END}"),
                    f"{marker}{prefix.value + digit.value}",
                ))
            tens.append((compile_pattern(rf"{WORD_START}{prefix.pattern}{WORD_END}"), f"{marker}{prefix.value}"))

        return cls(
            implicit_hundreds=implicit_hundreds,
            hundred=tables.hundred,
            simple=simple,
            article=article,
            article_token=f"{marker}1",
            tens=tuple(tens),
        )


def rewrite_numerals(text: str, patterns: NumeralPatterns) -> str:
    """
    Parse straight-forward numerals from the given text.

    Args:
        text: Normalized text
        patterns: Compiled numeral patterns of the active rule set

    Returns:
        Text with number words replaced by marked numeric tokens
    """
    result = replace(
        patterns.implicit_hundreds,
        text,
        lambda match: f"{match.group(1)} {patterns.hundred} {match.group(2)}",
    )

    for pattern, token in patterns.simple:
        result = replace(pattern, result, token)

    result = replace(patterns.article, result, patterns.article_token)

    for pattern, token in patterns.tens:
        result = replace(pattern, result, token)

    logger.debug(f"numerals: {text!r} -> {result!r}")
    return result
