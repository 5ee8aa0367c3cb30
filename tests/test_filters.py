"""Tests for filter validation and application."""
import pytest

from string_analyzer.exceptions import FilterValidationError
from string_analyzer.services.filters import FilterSet, apply_filters, validate_filters
from string_analyzer.utils import analyze_string


@pytest.fixture
def records():
    return [analyze_string(v) for v in ("aa", "ab", "abc", "Race car", "hello world", "level")]


def _values(records):
    return [r.value for r in records]


class TestValidateFilters:
    def test_empty(self):
        filters = validate_filters({})
        assert filters.is_empty()
        assert filters.applied() == {}

    def test_none_values_are_ignored(self):
        assert validate_filters({"min_length": None, "is_palindrome": None}).applied() == {}

    def test_all_valid(self):
        filters = validate_filters({
            "is_palindrome": "true",
            "min_length": "2",
            "max_length": "10",
            "word_count": "0",
            "contains_character": "a",
        })
        assert filters.applied() == {
            "is_palindrome": True,
            "min_length": 2,
            "max_length": 10,
            "word_count": 0,
            "contains_character": "a",
        }

    def test_false_literal(self):
        assert validate_filters({"is_palindrome": "false"}).is_palindrome is False

    @pytest.mark.parametrize("raw", ["maybe", "True", "1", ""])
    def test_bad_boolean(self, raw):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"is_palindrome": raw})
        assert exc_info.value.errors == ["is_palindrome must be true or false"]

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "12abc"])
    def test_non_integer(self, raw):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"word_count": raw})
        assert exc_info.value.errors == ["word_count must be an integer"]

    def test_negative_integer(self):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"max_length": "-3"})
        assert exc_info.value.errors == ["max_length must not be a negative number"]

    @pytest.mark.parametrize("raw", ["", "ab"])
    def test_contains_character_length(self, raw):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"contains_character": raw})
        assert exc_info.value.errors == ["contains_character must be a single character"]

    def test_errors_are_aggregated(self):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"is_palindrome": "maybe", "min_length": "-1"})

        errors = exc_info.value.errors
        assert len(errors) == 2
        assert len(set(errors)) == 2

    def test_min_greater_than_max(self):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"min_length": "5", "max_length": "2"})
        assert exc_info.value.errors == ["min_length cannot be greater than max_length"]

    def test_range_error_reported_with_field_errors(self):
        with pytest.raises(FilterValidationError) as exc_info:
            validate_filters({"min_length": "5", "max_length": "2", "contains_character": "xy"})
        assert exc_info.value.errors == [
            "contains_character must be a single character",
            "min_length cannot be greater than max_length",
        ]

    def test_unknown_params_are_ignored(self):
        assert validate_filters({"sort": "asc"}).is_empty()


class TestApplyFilters:
    def test_empty_filter_set_returns_everything(self, records):
        assert apply_filters(FilterSet(), records) == records

    def test_length_bounds_are_inclusive(self, records):
        result = apply_filters(FilterSet(min_length=2, max_length=2), records)
        assert _values(result) == ["aa", "ab"]

    def test_palindrome(self, records):
        assert _values(apply_filters(FilterSet(is_palindrome=True), records)) == ["aa", "Race car", "level"]

    def test_word_count(self, records):
        assert _values(apply_filters(FilterSet(word_count=2), records)) == ["Race car", "hello world"]

    def test_contains_character_is_case_sensitive(self, records):
        assert _values(apply_filters(FilterSet(contains_character="R"), records)) == ["Race car"]
        assert _values(apply_filters(FilterSet(contains_character="r"), records)) == ["Race car", "hello world"]

    def test_conjunction(self, records):
        filters = FilterSet(is_palindrome=True, word_count=1, min_length=3)
        assert _values(apply_filters(filters, records)) == ["level"]

    def test_no_match(self, records):
        assert apply_filters(FilterSet(contains_character="z"), records) == []
