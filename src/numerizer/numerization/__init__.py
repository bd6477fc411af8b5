"""Rewriting pipeline that turns numeric words into numbers."""

from .locales import LocaleChoice, NumberingSystem
from .rule_set import RuleSet, StageResult, get_rule_set, supported_choices
from .tables import LexicalRule, RuleTables, load_rule_tables

__all__ = [
    "LocaleChoice",
    "NumberingSystem",
    "RuleSet",
    "StageResult",
    "get_rule_set",
    "supported_choices",
    "LexicalRule",
    "RuleTables",
    "load_rule_tables",
]
