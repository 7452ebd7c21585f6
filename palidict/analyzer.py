"""
Lookup orchestration for palidict.

A query goes through three stages, stopping at the first that finds
something:

1. direct search       "dhamma"       -> dhamma, dhammacakka, saddhamma ...
2. stemmed search      "dhammassa"    -> dhamma
3. decomposition       "dhammacakka"  -> dhamma + cakka

Stages 2 and 3 only run when analysis is enabled. Finding nothing is a
normal outcome and returns an empty analysis.
"""

import logging
from typing import List, Optional, Tuple

from palidict.characters import normalize_query
from palidict.dictionary import Dictionary, get_dictionary
from palidict.errors import EmptyQueryError
from palidict.raw_types import (
    CompoundAnalysis,
    CompoundPart,
    DictEntry,
    LookupQuery,
    resolve_scope,
)
from palidict.splits import Decomposer
from palidict.stemming import stem_candidates

logger = logging.getLogger(__name__)


class Analyzer:
    """Runs the direct / stemmed / compound lookup pipeline over a Dictionary."""

    def __init__(self, dictionary: Optional[Dictionary] = None):
        self.dictionary = dictionary if dictionary is not None else get_dictionary()

    def lookup(
        self,
        query: str,
        scope="PED",
        fuzzy: bool = False,
        starts_with_only: bool = False,
        analyze: bool = True,
    ) -> CompoundAnalysis:
        """
        Look up a word, falling back to stemming and compound analysis.

        Args:
            query: Word as typed, Unicode or Velthuis
            scope: "PED", "DPPN", "ALL" or a DictSource
            fuzzy: Ignore diacritics, vowel length and consonant doubling
            starts_with_only: Direct search only accepts exact/prefix matches
            analyze: Try stemming and decomposition when direct search misses

        Returns:
            CompoundAnalysis; empty results when nothing matched

        Raises:
            EmptyQueryError: If query is empty or whitespace-only
            ValueError: If scope names an unknown dictionary
        """
        word = normalize_query(query)
        if not word:
            raise EmptyQueryError("query must be non-empty and not whitespace-only")
        sources = resolve_scope(scope)

        direct = self.dictionary.search(word, sources, fuzzy, starts_with_only)
        if direct:
            return CompoundAnalysis(query=query, results=tuple(direct))

        if not analyze:
            return CompoundAnalysis(query=query)

        stemmed = self.lookup_stems(word, sources, fuzzy)
        if stemmed:
            logger.debug(f"{word!r} resolved by stemming")
            return CompoundAnalysis(query=query, results=tuple(stemmed))

        breakdown = self.lookup_compound(word, sources, fuzzy)
        if breakdown:
            return CompoundAnalysis(query=query, is_compound=True, breakdown=breakdown)

        logger.debug(f"No result for {word!r}")
        return CompoundAnalysis(query=query)

    def lookup_query(self, query: LookupQuery) -> CompoundAnalysis:
        return self.lookup(
            query.text,
            scope=query.scope,
            fuzzy=query.fuzzy,
            starts_with_only=query.starts_with_only,
            analyze=query.analyze,
        )

    def lookup_stems(self, word: str, sources, fuzzy: bool = False) -> List[DictEntry]:
        """
        Try each stem hypothesis for word in order.

        A hypothesis is accepted when a prefix search for it returns
        headwords spelled exactly like it; those headwords are returned.
        """
        for candidate in stem_candidates(word)[1:]:
            results = self.dictionary.search(candidate, sources, fuzzy, starts_with_only=True)
            exact = [
                entry for entry in results
                if self.dictionary.same_word(entry.headword, candidate, fuzzy)
            ]
            if exact:
                return exact
        return []

    def lookup_compound(self, word: str, sources, fuzzy: bool = False) -> Tuple[CompoundPart, ...]:
        """
        Decompose word and look up each member.

        Each member is searched by its base form, then by its surface form.

        Returns:
            The breakdown, or an empty tuple when no member was found
        """
        decomposer = Decomposer(lambda part: self.dictionary.is_attested(part, sources, fuzzy))
        parts = decomposer.decompose(word)
        if len(parts) < 2:
            return ()

        breakdown = []
        found_any = False
        for part in parts:
            results = self.dictionary.search(part.base, sources, fuzzy)
            if not results and part.surface != part.base:
                results = self.dictionary.search(part.surface, sources, fuzzy)
            if results:
                found_any = True
            breakdown.append(CompoundPart(part=part, results=tuple(results)))

        if not found_any:
            return ()
        return tuple(breakdown)

    def entry_by_id(self, source, entry_id: str) -> DictEntry:
        return self.dictionary.entry_by_id(source, entry_id)
