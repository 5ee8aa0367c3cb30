import re
import hashlib
from collections import Counter
from typing import Dict

from string_analyzer.models.analyzed_string import AnalyzedString, StringProperties, utcnow


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string.

    Lone surrogates are encoded with ``surrogatepass`` so every ``str``
    has a digest.
    """
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


# Whitespace as JavaScript's \s defines it: no \x1c-\x1f or \x85, but \ufeff.
_WHITESPACE_RE = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)


def count_length(text: str) -> int:
    """Length in UTF-16 code units, so non-BMP characters count twice"""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def normalize_for_palindrome(text: str) -> str:
    """Lower-case and drop every whitespace character"""
    return _WHITESPACE_RE.sub("", text.lower())


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, ignoring whitespace)"""
    cleaned = normalize_for_palindrome(text)
    return cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len([word for word in _WHITESPACE_RE.split(text) if word])


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> AnalyzedString:
    """Analyze a string and return all computed properties.

    Everything but ``created_at`` depends only on ``value``.
    """
    sha256_hash = compute_sha256(value)

    return AnalyzedString(
        id=sha256_hash,
        value=value,
        properties=StringProperties(
            length=count_length(value),
            is_palindrome=is_palindrome(value),
            unique_characters=count_unique_characters(value),
            word_count=count_words(value),
            sha256_hash=sha256_hash,
            character_frequency_map=get_character_frequency(value),
        ),
        created_at=utcnow(),
    )
