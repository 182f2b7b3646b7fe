"""
Implementation of MeaningLookup using the Free Dictionary API (https://dictionaryapi.dev).

The API answers 200 with a list of entries for known words, and 404 for unknown ones.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from src.config import DICTIONARY_API_URL, DICTIONARY_TIMEOUT
from src.dictionary.lookup import LookupResult

logger = logging.getLogger(__name__)

FALLBACK_MEANING = "Valid English word"


class DictionaryClient:
    """Looks words up over HTTP. Network trouble counts as 'not a word', so a turn can always be completed."""

    def __init__(
        self,
        base_url: str = DICTIONARY_API_URL,
        timeout: float = DICTIONARY_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def lookup(self, word: str) -> LookupResult:
        """Look up a word. Returns the first definition found as meaning."""
        word_lower = word.lower()
        url = f"{self.base_url}/{quote(word_lower)}"

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Dictionary lookup for %r failed: %s", word_lower, exc)
            return LookupResult(is_valid=False)

        if response.status_code == 404:
            logger.info("Word %r not found in dictionary", word_lower)
            return LookupResult(is_valid=False)

        if response.status_code != 200:
            logger.warning(
                "Dictionary lookup for %r returned status %s",
                word_lower,
                response.status_code,
            )
            return LookupResult(is_valid=False)

        try:
            entries = response.json()
        except ValueError:
            logger.warning("Dictionary returned malformed JSON for %r", word_lower)
            return LookupResult(is_valid=False)

        if not isinstance(entries, list) or not entries:
            return LookupResult(is_valid=False)

        return LookupResult(is_valid=True, meaning=first_definition(entries))


def first_definition(entries: list[Any]) -> str:
    """Dig out entries[0].meanings[0].definitions[0].definition, if the response has that shape."""
    try:
        definition = entries[0]["meanings"][0]["definitions"][0]["definition"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_MEANING
    return definition or FALLBACK_MEANING
