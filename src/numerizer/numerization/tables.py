#!/usr/bin/env python3
"""
Lexical rule tables.

Each table maps a word (or a regex fragment such as ``thirds?``) to the value
it stands for. Tables are read from the language resource file once and frozen
into tuples, so a loaded ``RuleTables`` can be shared freely between threads.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NamedTuple

from .constants import get_resources


class LexicalRule(NamedTuple):
    """A single ``pattern -> value`` rule."""

    pattern: str
    value: int


RuleTable = tuple[LexicalRule, ...]


@dataclass(frozen=True)
class RuleTables:
    """The seven lexical tables of one language, plus its marker and articles."""

    direct_numbers: RuleTable
    single_digits: RuleTable
    tens_prefixes: RuleTable
    magnitude_suffixes: RuleTable
    direct_number_fractions: RuleTable
    single_digit_fractions: RuleTable
    tens_prefix_fractions: RuleTable
    marker: str = "<num>"
    indefinite_articles: tuple[str, ...] = ("a", "an")
    conjunction: str = "and"

    @property
    def numerals(self) -> RuleTable:
        """Direct numbers followed by single digits, in replacement order."""
        return self.direct_numbers + self.single_digits

    @property
    def fractions(self) -> RuleTable:
        """Every fractional rule, in replacement order."""
        return self.direct_number_fractions + self.single_digit_fractions + self.tens_prefix_fractions

    @property
    def hundred(self) -> str:
        """The suffix word worth 100, inserted for implicit hundreds."""
        for rule in self.magnitude_suffixes:
            if rule.value == 100:
                return rule.pattern
        raise ValueError("magnitude_suffixes has no rule for 100")

    @staticmethod
    def alternation(table: RuleTable) -> str:
        """Join a table's patterns into a single regex alternation."""
        return "|".join(rule.pattern for rule in table)


def _freeze_table(resources: dict[str, Any], key: str) -> RuleTable:
    try:
        entries = resources[key]
    except KeyError:
        raise ValueError(f"Language resource is missing the '{key}' table") from None
    return tuple(LexicalRule(str(pattern), int(value)) for pattern, value in entries)


@lru_cache(maxsize=None)
def load_rule_tables(language: str = "en") -> RuleTables:
    """
    Build the immutable rule tables for a language.

    Args:
        language: Language code of the resource file to read

    Returns:
        RuleTables shared by every caller asking for the same language
    """
    resources = get_resources(language)
    tables = RuleTables(
        direct_numbers=_freeze_table(resources, "direct_numbers"),
        single_digits=_freeze_table(resources, "single_digits"),
        tens_prefixes=_freeze_table(resources, "tens_prefixes"),
        magnitude_suffixes=tuple(
            sorted(_freeze_table(resources, "magnitude_suffixes"), key=lambda rule: rule.value)
        ),
        direct_number_fractions=_freeze_table(resources, "direct_number_fractions"),
        single_digit_fractions=_freeze_table(resources, "single_digit_fractions"),
        tens_prefix_fractions=_freeze_table(resources, "tens_prefix_fractions"),
        marker=resources.get("marker", "<num>"),
        indefinite_articles=tuple(resources.get("indefinite_articles", ("a", "an"))),
        conjunction=resources.get("conjunction", "and"),
    )
    return tables
