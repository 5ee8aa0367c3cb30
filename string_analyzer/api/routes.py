from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Optional
import logging

from string_analyzer.database import StringStore, get_store
from string_analyzer.crud import strings as crud
from string_analyzer.exceptions import (
    InvalidInputError,
    StringNotFoundError,
    UnparseableQueryError,
)
from string_analyzer.schemas.strings import (
    ErrorResponse,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringResponse,
)
from string_analyzer.services.filters import validate_filters
from string_analyzer.services.query_parser import interpret_query

router = APIRouter()
logger = logging.getLogger(__name__)


def _extract_value(payload: Any) -> str:
    """Pull the string ``value`` out of a POST body"""
    if not isinstance(payload, dict) or payload.get("value") is None:
        raise InvalidInputError("Invalid request body or missing 'value' field", missing=True)

    value = payload["value"]
    if not isinstance(value, str):
        raise InvalidInputError("Value must be a string")
    return value


@router.post(
    "/strings",
    response_model=StringResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}}
)
def create_string(
    payload: Any = Body(None, examples=[{"value": "A man a plan a canal Panama"}]),
    store: StringStore = Depends(get_store)
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    value = _extract_value(payload)
    record = crud.create_string_analysis(store, value)
    return StringResponse.model_validate(record)


@router.get("/strings", response_model=StringListResponse, responses={400: {"model": ErrorResponse}})
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="true or false"),
    min_length: Optional[str] = Query(None, description="Minimum length (inclusive)"),
    max_length: Optional[str] = Query(None, description="Maximum length (inclusive)"),
    word_count: Optional[str] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="A single character"),
    store: StringStore = Depends(get_store)
):
    """
    Get all strings with optional filtering.
    All invalid parameters are reported together.
    """
    filters = validate_filters({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })

    logger.debug(f"Listing strings with filters: {filters.applied()}")
    strings = crud.get_all_strings(store, filters)
    data = [StringResponse.model_validate(s) for s in strings]

    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.applied()
    )


@router.get(
    "/strings/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    responses={400: {"model": ErrorResponse}}
)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    store: StringStore = Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query or not query.strip():
        raise InvalidInputError("Query is required", missing=True)

    filters = interpret_query(query)
    if filters is None:
        raise UnparseableQueryError(query)

    strings = crud.get_all_strings(store, filters)
    data = [StringResponse.model_validate(s) for s in strings]

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(
            original=query,
            parsed_filters=filters.applied()
        )
    )


@router.get("/strings/{string_value:path}", response_model=StringResponse, responses={404: {"model": ErrorResponse}})
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    record = crud.get_string_by_value(store, string_value)
    if record is None:
        raise StringNotFoundError()
    return StringResponse.model_validate(record)


@router.delete(
    "/strings/{string_value:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}}
)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    if not crud.delete_string(store, string_value):
        raise StringNotFoundError()
    return None
