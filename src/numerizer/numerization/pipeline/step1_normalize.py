#!/usr/bin/env python3
"""
Step 1 of the numerization pipeline: Normalization.

Prepares raw text for rule application. This includes:
- Lowercasing
- Collapsing runs of whitespace
- Splitting hyphenated words, leaving numeric ranges such as "2-3" alone
- Removing a trailing indefinite article

No numeric resolution happens here.
"""
from __future__ import annotations

import re

from ..patterns import compile_pattern, replace
from ...core.config import setup_logging

logger = setup_logging(__name__)

WHITESPACE_RUN = compile_pattern(r"\s+")
WORD_HYPHEN = compile_pattern(r"(?<=\D)-(?=\D)")


def trailing_article_pattern(articles: tuple[str, ...]) -> re.Pattern[str]:
    """Build the pattern matching one indefinite article at the end of the text."""
    alternation = "|".join(re.escape(article) for article in sorted(articles, key=len, reverse=True))
    return compile_pattern(rf"(?<!\w)(?:{alternation})\s*$")


DEFAULT_TRAILING_ARTICLE = trailing_article_pattern(("a", "an"))


def normalize(text: str, trailing_article: re.Pattern[str] = DEFAULT_TRAILING_ARTICLE) -> str:
    """
    Prepare the given text for processing.

    Args:
        text: Raw input text
        trailing_article: Pattern of an indefinite article ending the text,
            see trailing_article_pattern()

    Returns:
        Lowercased text with single spaces, split hyphenated words and no
        trailing article
    """
    result = text.lower()
    result = replace(WHITESPACE_RUN, result, " ")
    result = replace(WORD_HYPHEN, result, " ")
    result = replace(trailing_article, result, "").strip()

    logger.debug(f"normalize: {text!r} -> {result!r}")
    return result
