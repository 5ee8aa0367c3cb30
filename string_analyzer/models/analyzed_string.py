from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StringProperties:
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


@dataclass(frozen=True)
class AnalyzedString:
    id: str  # SHA-256 hash of value
    value: str
    properties: StringProperties
    created_at: datetime = field(default_factory=utcnow)
