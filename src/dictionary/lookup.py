"""Protocol for anything that can tell whether a word carries a meaning (HTTP dictionary, fixed word list for tests, etc.)"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class LookupResult:
    is_valid: bool
    meaning: Optional[str] = None


class MeaningLookup(Protocol):
    """Meaning check consumed by the service layer."""

    def lookup(self, word: str) -> LookupResult:
        """Look the word up. Must never raise: any failure is reported as an invalid word."""
        ...
