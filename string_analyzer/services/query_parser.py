"""
Natural language query parsing.

Translates a short phrase such as "all single word palindromic strings" into
the same FilterSet the structured ``GET /strings`` filters produce. Only the
phrases in QUERY_RULES are understood; each rule is independent and every
matching rule contributes its filter.
"""
import re
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from string_analyzer.services.filters import FilterSet

logger = logging.getLogger(__name__)


class QueryRule(NamedTuple):
    name: str
    pattern: "re.Pattern[str]"
    build: Callable[["re.Match[str]"], Dict[str, Any]]


QUERY_RULES: List[QueryRule] = [
    # "all palindromic strings" -> {is_palindrome: true}
    QueryRule(
        "palindrome",
        re.compile(r"palindromic"),
        lambda m: {"is_palindrome": True},
    ),
    # "single word strings" / "one word strings" -> {word_count: 1}
    QueryRule(
        "single_word",
        re.compile(r"single word|one word"),
        lambda m: {"word_count": 1},
    ),
    # "strings longer than 10 characters" -> {min_length: 11}
    QueryRule(
        "longer_than",
        re.compile(r"longer than (\d+)", re.ASCII),
        lambda m: {"min_length": int(m.group(1)) + 1},
    ),
    # "strings containing the letter z" -> {contains_character: "z"}
    QueryRule(
        "contains_letter",
        re.compile(r"containing the letter (\w)", re.ASCII),
        lambda m: {"contains_character": m.group(1)},
    ),
]


def parse_natural_language_query(query: str, rules: List[QueryRule] = QUERY_RULES) -> Dict[str, Any]:
    """
    Parse natural language query into filter parameters.
    Matching is case-insensitive; an empty dict means nothing matched.
    """
    lowered = query.lower()
    filters: Dict[str, Any] = {}

    for rule in rules:
        match = rule.pattern.search(lowered)
        if match:
            filters.update(rule.build(match))

    return filters


def interpret_query(query: str) -> Optional[FilterSet]:
    """Interpret a phrase as a FilterSet, or None if no rule matched"""
    filters = parse_natural_language_query(query)
    if not filters:
        logger.warning(f"Unable to interpret query: {query!r}")
        return None
    logger.info(f"Interpreted query {query!r} as {filters}")
    return FilterSet.model_construct(**filters)
