import logging
from typing import List, Optional

from string_analyzer.database import StringStore
from string_analyzer.exceptions import StringAlreadyExistsError
from string_analyzer.models.analyzed_string import AnalyzedString
from string_analyzer.services.filters import FilterSet, apply_filters
from string_analyzer.utils import analyze_string, compute_sha256

logger = logging.getLogger(__name__)


def create_string_analysis(store: StringStore, value: str) -> AnalyzedString:
    """Analyze and store a new string.

    Raises StringAlreadyExistsError if the value's digest is already stored;
    the existing record is not re-analyzed or overwritten.
    """
    string_id = compute_sha256(value)
    record, created = store.insert_if_absent(string_id, lambda: analyze_string(value))
    if not created:
        logger.warning(f"Duplicate string rejected: {string_id}")
        raise StringAlreadyExistsError(record)

    logger.info(f"Stored string analysis {string_id} (length={record.properties.length})")
    return record


def get_string_by_value(store: StringStore, value: str) -> Optional[AnalyzedString]:
    """Get string analysis by value"""
    return store.get(compute_sha256(value))


def get_all_strings(store: StringStore, filters: Optional[FilterSet] = None) -> List[AnalyzedString]:
    """Get all strings, optionally narrowed by a filter set"""
    records = store.values()
    if filters is None:
        return records
    return apply_filters(filters, records)


def delete_string(store: StringStore, value: str) -> bool:
    """Delete string analysis by value"""
    string_id = compute_sha256(value)
    removed = store.remove(string_id)
    if removed:
        logger.info(f"Deleted string analysis {string_id}")
    return removed
