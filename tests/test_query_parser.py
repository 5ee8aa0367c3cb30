"""Tests for natural language query interpretation."""
import re

import pytest

from string_analyzer.services.filters import FilterSet, apply_filters
from string_analyzer.services.query_parser import (
    QUERY_RULES,
    QueryRule,
    interpret_query,
    parse_natural_language_query,
)
from string_analyzer.utils import analyze_string


class TestParseNaturalLanguageQuery:
    @pytest.mark.parametrize("query, expected", [
        ("all single word palindromic strings", {"is_palindrome": True, "word_count": 1}),
        ("one word strings", {"word_count": 1}),
        ("strings longer than 10 characters", {"min_length": 11}),
        ("strings containing the letter z", {"contains_character": "z"}),
        ("palindromic strings containing the letter a", {"is_palindrome": True, "contains_character": "a"}),
        ("PALINDROMIC strings LONGER THAN 3", {"is_palindrome": True, "min_length": 4}),
    ])
    def test_recognized_phrases(self, query, expected):
        assert parse_natural_language_query(query) == expected

    def test_letter_is_lowercased(self):
        assert parse_natural_language_query("containing the letter Q") == {"contains_character": "q"}

    def test_longer_than_zero(self):
        assert parse_natural_language_query("longer than 0") == {"min_length": 1}

    def test_nothing_matched(self):
        assert parse_natural_language_query("banana") == {}

    def test_non_ascii_digits_are_not_numbers(self):
        assert parse_natural_language_query("longer than \u0663") == {}

    def test_non_ascii_letter_is_not_matched(self):
        assert parse_natural_language_query("containing the letter \u00e9") == {}
        assert interpret_query("containing the letter \u00e9") is None

    def test_custom_rules(self):
        rules = QUERY_RULES + [
            QueryRule("shorter_than", re.compile(r"shorter than (\d+)"),
                      lambda m: {"max_length": int(m.group(1)) - 1}),
        ]
        assert parse_natural_language_query("shorter than 5", rules) == {"max_length": 4}


class TestInterpretQuery:
    def test_returns_filter_set(self):
        filters = interpret_query("single word palindromic strings")
        assert isinstance(filters, FilterSet)
        assert filters.applied() == {"is_palindrome": True, "word_count": 1}

    def test_unparseable(self):
        assert interpret_query("banana") is None

    def test_empty(self):
        assert interpret_query("") is None

    def test_same_result_as_structured_filters(self):
        records = [analyze_string(v) for v in ("level", "noon moon", "hello", "racecar", "a b a")]

        interpreted = interpret_query("single word palindromic strings")
        manual = FilterSet(is_palindrome=True, word_count=1)

        assert apply_filters(interpreted, records) == apply_filters(manual, records)
        assert [r.value for r in apply_filters(interpreted, records)] == ["level", "racecar"]
