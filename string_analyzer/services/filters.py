import re
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from string_analyzer.exceptions import FilterValidationError
from string_analyzer.models.analyzed_string import AnalyzedString

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class FilterSet(BaseModel):
    """Validated filters, applied conjunctively. Unset fields impose nothing."""

    model_config = ConfigDict(frozen=True)

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    def applied(self) -> Dict[str, Any]:
        """Only the filters that are set, keyed by name"""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()


# ------------------------------------------------------------------------------
# VALIDATION
# ------------------------------------------------------------------------------
def _parse_bool(name: str, raw: str, errors: List[str]) -> Optional[bool]:
    if raw == "true":
        return True
    if raw == "false":
        return False
    errors.append(f"{name} must be true or false")
    return None


def _parse_non_negative_int(name: str, raw: str, errors: List[str]) -> Optional[int]:
    if not _INTEGER_RE.fullmatch(raw):
        errors.append(f"{name} must be an integer")
        return None
    number = int(raw, 10)
    if number < 0:
        errors.append(f"{name} must not be a negative number")
        return None
    return number


def _parse_character(name: str, raw: str, errors: List[str]) -> Optional[str]:
    if len(raw) != 1:
        errors.append(f"{name} must be a single character")
        return None
    return raw


def validate_filters(raw_params: Mapping[str, Optional[str]]) -> FilterSet:
    """Turn raw query parameters into a FilterSet.

    Every parameter is checked before returning; on failure a single
    FilterValidationError carries all of the messages. Parameters that are
    absent or ``None`` are skipped and unknown names are ignored.
    """
    errors: List[str] = []
    parsed: Dict[str, Any] = {}

    raw = raw_params.get("is_palindrome")
    if raw is not None:
        parsed["is_palindrome"] = _parse_bool("is_palindrome", raw, errors)

    for name in ("min_length", "max_length", "word_count"):
        raw = raw_params.get(name)
        if raw is not None:
            parsed[name] = _parse_non_negative_int(name, raw, errors)

    raw = raw_params.get("contains_character")
    if raw is not None:
        parsed["contains_character"] = _parse_character("contains_character", raw, errors)

    min_length = parsed.get("min_length")
    max_length = parsed.get("max_length")
    if min_length is not None and max_length is not None and min_length > max_length:
        errors.append("min_length cannot be greater than max_length")

    if errors:
        logger.warning(f"Rejected filter parameters: {errors}")
        raise FilterValidationError(errors)

    return FilterSet(**parsed)


# ------------------------------------------------------------------------------
# APPLICATION
# ------------------------------------------------------------------------------
def matches(filters: FilterSet, record: AnalyzedString) -> bool:
    """Check one record against every filter that is set"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None and filters.contains_character not in record.value:
        return False

    return True


def apply_filters(filters: FilterSet, records: Iterable[AnalyzedString]) -> List[AnalyzedString]:
    """Return the records that satisfy all filters, order preserved"""
    return [record for record in records if matches(filters, record)]
