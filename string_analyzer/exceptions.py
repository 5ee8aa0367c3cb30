from typing import List, Optional


class StringAnalyzerError(Exception):
    """Base class for expected, caller-recoverable errors."""


class InvalidInputError(StringAnalyzerError):
    """A required string value was missing or had the wrong type"""

    def __init__(self, message: str, missing: bool = False):
        super().__init__(message)
        self.missing = missing


class StringAlreadyExistsError(StringAnalyzerError):
    """Raised when a value whose digest is already stored is submitted again.

    The stored record is kept on ``existing`` so callers can echo it back.
    """

    def __init__(self, existing, message: str = "String already exists in the system"):
        super().__init__(message)
        self.existing = existing


class StringNotFoundError(StringAnalyzerError):
    """Referenced content is not in the store"""

    def __init__(self, message: str = "String does not exist in the system"):
        super().__init__(message)


class FilterValidationError(StringAnalyzerError):
    """One or more filter parameters were rejected.

    ``errors`` holds every message, in the order the parameters were checked.
    """

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class UnparseableQueryError(StringAnalyzerError):
    def __init__(self, query: Optional[str] = None,
                 message: str = "Unable to parse natural language query"):
        super().__init__(message)
        self.query = query
