#!/usr/bin/env python3
"""
Tests for the individual pipeline stages.

Each stage is fed the output the previous stage would produce, so a failure
points at the stage that broke rather than at the whole pipeline.
"""

import pytest

from numerizer.numerization import get_rule_set
from numerizer.numerization.pipeline import normalize
from numerizer.numerization.pipeline.andition import should_merge
from numerizer.numerization.pipeline.step1_normalize import trailing_article_pattern
from numerizer.numerization.pipeline.step5_finalize import finalize


class TestNormalize:
    """Test text preparation before any rule runs."""

    def test_normalization(self):
        test_cases = [
            ("Twenty   One", "twenty one"),
            ("\t five \n", "five"),
            ("twenty-one", "twenty one"),
            ("pages 2-3", "pages 2-3"),  # numeric ranges keep their hyphen
            ("twenty-3", "twenty-3"),
            ("i want a", "i want"),
            ("i want an ", "i want"),
            ("banana", "banana"),  # not an article
            ("a cup of tea", "a cup of tea"),
            ("", ""),
        ]

        for input_text, expected in test_cases:
            result = normalize(input_text)
            assert result == expected, f"Input '{input_text}' should normalize to '{expected}', got '{result}'"

    def test_custom_articles(self):
        pattern = trailing_article_pattern(("un", "une"))
        assert normalize("donne moi une", pattern) == "donne moi"
        assert normalize("i want a", pattern) == "i want a"


class TestNumerals:
    """Test cardinal words becoming marked tokens."""

    def test_numerals(self, rule_set):
        test_cases = [
            ("eleven", "<num>11"),
            ("forty two", "<num>40 <num>2"),
            ("twentytwo", "<num>22"),
            ("two nineteen", "<num>2 hundred <num>19"),
            ("one fifty five", "<num>1 hundred <num>50 <num>5"),
            ("a", "<num>1"),
            ("an hour", "<num>1 hour"),
            ("someone often", "someone often"),
            ("two hundred", "<num>2 hundred"),
        ]

        for input_text, expected in test_cases:
            result = rule_set.rewrite_numerals(input_text)
            assert result == expected, f"Input '{input_text}' should rewrite to '{expected}', got '{result}'"


class TestFractions:
    """Test fractional words becoming fractions and decimals."""

    def test_fractions(self, rule_set):
        test_cases = [
            ("<num>2 fifths", "<num>2/5"),
            ("fifths", "<num>1/5"),
            ("<num>1 half", "<num>1/2"),
            ("<num>1 and <num>2 thirds", "<num>1.667"),
            ("<num>2 <num>1 fifth", "<num>2.200"),
            ("page/2", "page/2"),  # not one of our fragments
            ("<num>1 and <num>2/0", "<num>1 and <num>2/0"),  # zero denominator
        ]

        for input_text, expected in test_cases:
            result = rule_set.rewrite_fractions(input_text)
            assert result == expected, f"Input '{input_text}' should rewrite to '{expected}', got '{result}'"

    @pytest.mark.parametrize("precision, expected", [(0, "<num>2"), (1, "<num>1.7"), (5, "<num>1.66667")])
    def test_precision(self, precision, expected):
        rule_set = get_rule_set("en", "latn", precision)
        assert rule_set.rewrite_fractions("<num>1 and <num>2 thirds") == expected

    def test_negative_precision_is_rejected(self):
        with pytest.raises(ValueError):
            get_rule_set("en", "latn", -1)


class TestMagnitudes:
    """Test suffix multiplication and the andition passes around it."""

    def test_magnitudes(self, rule_set):
        test_cases = [
            ("hundred", "<num>100"),
            ("<num>2 hundred", "<num>200"),
            ("100 thousand", "<num>100000"),
            ("<num>20 <num>2 hundred", "<num>2200"),
            ("<num>1.500 million", "<num>1500000"),
            ("<num>0.250 thousand", "<num>250"),
            ("<num>1.2345 thousand", "<num>1234.5"),
            ("<num>1 thousand and <num>1", "<num>1001"),
            ("<num>100 and <num>2/5", "<num>100.400"),
            ("hundredweight", "hundredweight"),
            ("<num>2 hundreds", "<num>2 hundreds"),
        ]

        for input_text, expected in test_cases:
            result = rule_set.rewrite_magnitudes(input_text)
            assert result == expected, f"Input '{input_text}' should rewrite to '{expected}', got '{result}'"


class TestAndition:
    """Test merging of adjacent tokens."""

    def test_should_merge(self):
        assert should_merge("900", " ", "99")
        assert should_merge("5", " and ", "5")
        assert not should_merge("5", " ", "5")
        assert not should_merge("1", " ", "20")

    def test_merge(self, rule_set):
        test_cases = [
            ("<num>900 <num>99", "<num>999"),
            ("<num>5 and <num>5", "<num>10"),
            ("<num>5 <num>5", "<num>5 <num>5"),
            ("<num>1 <num>20", "<num>1 <num>20"),
            ("<num>5 <num>5 and <num>5", "<num>5 <num>10"),
            ("<num>2/5 <num>1", "<num>2/5 <num>1"),
            ("<num>100 and <num>2/5", "<num>100 and <num>2/5"),
            ("<num>90 <num>1.400", "<num>91.400"),
        ]

        for input_text, expected in test_cases:
            result = rule_set.merge(input_text)
            assert result == expected, f"Input '{input_text}' should merge to '{expected}', got '{result}'"

    def test_equal_width_runs_terminate(self, rule_set):
        """Declined pairs never stall the loop, however many there are."""
        text = " ".join(["<num>5"] * 200)
        assert rule_set.merge(text) == text


class TestFinalize:
    """Test marker removal."""

    def test_markers_are_removed(self):
        assert finalize("<num>42 and <num>1/2") == "42 and 1/2"

    def test_custom_marker(self):
        assert finalize("#42#", marker="#") == "42"
