"""
Query matching and relevance ranking.

A query and a headword are compared in one of three modes:

- FUZZY:    both sides reduced with ``to_fuzzy``
- UNICODE:  the query uses diacritics; compare lower-cased text as is
- VELTHUIS: the query is plain ASCII; headwords are converted to Velthuis
            so "nibbaana" finds "nibbāna"
"""

from enum import Enum
from typing import List, Sequence

from palidict.characters import has_unicode_chars, to_fuzzy, to_velthuis
from palidict.config import DEFAULT_MIN_CONTAINS_LENGTH
from palidict.raw_types import DictEntry


class MatchMode(str, Enum):
    FUZZY = "fuzzy"
    UNICODE = "unicode"
    VELTHUIS = "velthuis"

    @classmethod
    def for_query(cls, query: str, fuzzy: bool) -> "MatchMode":
        """Pick the mode a query is matched in."""
        if fuzzy:
            return cls.FUZZY
        if has_unicode_chars(query):
            return cls.UNICODE
        return cls.VELTHUIS


def query_form(query: str, mode: MatchMode) -> str:
    """Prepare a query for comparison in the given mode."""
    query = query.lower()
    if mode is MatchMode.FUZZY:
        return to_fuzzy(query)
    return query


def match_form(headword: str, mode: MatchMode) -> str:
    """Prepare a headword for comparison in the given mode."""
    if mode is MatchMode.FUZZY:
        return to_fuzzy(headword)
    if mode is MatchMode.UNICODE:
        return headword.lower()
    return to_velthuis(headword).lower()


def matches(
    word: str,
    query: str,
    starts_with_only: bool = False,
    min_contains_length: int = DEFAULT_MIN_CONTAINS_LENGTH,
) -> bool:
    """
    Check if a prepared headword matches a prepared query.

    Args:
        word: Headword in match form
        query: Query in match form (must be non-empty)
        starts_with_only: Only accept equality or prefix matches
        min_contains_length: Queries shorter than this never match mid-word

    Returns:
        True on an exact, prefix or (when allowed) substring match
    """
    if not query:
        return False
    if word.startswith(query):
        return True
    if starts_with_only or len(query) < min_contains_length:
        return False
    return query in word


def rank(results: Sequence[DictEntry], query: str, fuzzy: bool = False) -> List[DictEntry]:
    """
    Order results by relevance to the query.

    Exact matches come first, then prefix matches, then everything else;
    each group is alphabetical by match form. The sort is stable, so
    entries with identical forms keep their volume order.
    """
    mode = MatchMode.for_query(query, fuzzy)
    target = query_form(query, mode)

    def sort_key(entry: DictEntry):
        form = match_form(entry.headword, mode)
        return (form != target, not form.startswith(target), form)

    return sorted(results, key=sort_key)
