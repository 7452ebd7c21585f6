"""
Dictionary search over PED and DPPN volumes.

This module ties the volume store, the headword tries and the match/rank
rules together:

- ``search``:       exact / prefix / substring matches, ranked
- ``is_attested``:  does a word exist as a headword (used to score splits)
- ``entry_by_id``:  fetch one entry by its "volume/index" ID

Search results and attestation checks are cached in the same TTL cache as
the volumes themselves.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from palidict.cache import TTLCache
from palidict.characters import normalize_word
from palidict.config import Settings, load_settings
from palidict.errors import EmptyQueryError, EntryNotFoundError, MissingVolumeError
from palidict.headwords import render_definition
from palidict.matching import MatchMode, match_form, matches, query_form, rank
from palidict.raw_types import DictEntry, DictSource, resolve_scope
from palidict.volumes import FileVolumeReader, Volume, VolumeReader, VolumeStore

logger = logging.getLogger(__name__)


class Dictionary:
    """
    Searchable view over every volume of every dictionary source.

    Instances hold no per-lookup state and may be shared between threads.
    """

    def __init__(
        self,
        data_path: Optional[Path] = None,
        cache: Optional[TTLCache] = None,
        settings: Optional[Settings] = None,
        reader: Optional[VolumeReader] = None,
    ):
        if settings is None:
            settings = load_settings()
        if data_path is not None:
            settings = settings.with_data_path(data_path)
        self.settings = settings

        if cache is None:
            cache = TTLCache(settings.cache_ttl)
        self.cache = cache

        if reader is None:
            reader = FileVolumeReader(settings.data_path)
        self.volumes = VolumeStore(reader, cache)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self,
        query: str,
        scope="PED",
        fuzzy: bool = False,
        starts_with_only: bool = False,
    ) -> List[DictEntry]:
        """
        Find entries matching a query across a scope.

        Args:
            query: Word to look for, in either orthography
            scope: A source, a source name, or "ALL"
            fuzzy: Match on fuzzy forms (ignores diacritics, length, doubling)
            starts_with_only: Only exact and prefix matches

        Returns:
            Ranked entries; empty if nothing matches

        Raises:
            EmptyQueryError: If the query is blank
        """
        query = query.strip()
        sources = resolve_scope(scope)
        results: List[DictEntry] = []
        for source in sources:
            results.extend(self.search_source(query, source, fuzzy, starts_with_only))
        if len(sources) == 1:
            return results
        return rank(results, query, fuzzy)

    def search_source(
        self,
        query: str,
        source: DictSource,
        fuzzy: bool = False,
        starts_with_only: bool = False,
    ) -> Tuple[DictEntry, ...]:
        """Search all volumes of one source. Results are cached per query form."""
        query = query.strip()
        mode = MatchMode.for_query(query, fuzzy)
        target = query_form(query, mode)
        if not target:
            raise EmptyQueryError("query must be non-empty and not whitespace-only")

        key = f"{source.value.lower()}:{target}:mode={mode.value}:sw={starts_with_only}"
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        results: List[DictEntry] = []
        for volume in self.volumes.load_all((source,)):
            index = volume.index_for(mode)
            if starts_with_only:
                positions = index.with_prefix(target)
            else:
                positions = [
                    position for position, form in index.scan()
                    if matches(form, target, False, self.settings.min_contains_length)
                ]
            results.extend(self._make_entry(volume, position) for position in positions)

        ranked = tuple(rank(results, query, fuzzy))
        self.cache.set(key, ranked)
        return ranked

    def is_attested(self, word: str, scope="PED", fuzzy: bool = False) -> bool:
        """
        Check whether a word is a headword in the scope.

        Only whole-headword matches count; being a prefix or a substring of
        some headword does not.
        """
        mode = MatchMode.for_query(word, fuzzy)
        target = query_form(word.strip(), mode)
        if not target:
            return False

        word = word.strip()
        sources = resolve_scope(scope)
        scope_key = ",".join(source.value for source in sources)
        key = f"attested:{scope_key}:{target}:mode={mode.value}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        found = any(
            volume.index_for(mode).contains(target)
            for volume in self.volumes.load_all(sources)
        )
        self.cache.set(key, found)
        return found

    def same_word(self, headword: str, word: str, fuzzy: bool = False) -> bool:
        """Check that a headword spells word, compared in word's match mode."""
        mode = MatchMode.for_query(word, fuzzy)
        return match_form(headword, mode) == query_form(word, mode)

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def entry_by_id(self, source, entry_id: str) -> DictEntry:
        """
        Fetch one entry by ID.

        Args:
            source: Dictionary source or its name
            entry_id: "volume/index", e.g. "0/31"

        Returns:
            The entry

        Raises:
            EntryNotFoundError: If the ID is malformed, the volume is missing
                or the index is out of range
        """
        if not isinstance(source, DictSource):
            try:
                source = DictSource.parse(source)
            except ValueError:
                raise EntryNotFoundError(str(source), entry_id)

        volume_part, sep, position_part = entry_id.strip().partition("/")
        if not sep:
            raise EntryNotFoundError(source.value, entry_id)
        try:
            volume_index = int(volume_part)
            position = int(position_part)
        except ValueError:
            raise EntryNotFoundError(source.value, entry_id)

        try:
            volume = self.volumes.load_volume(source, volume_index)
        except MissingVolumeError:
            raise EntryNotFoundError(source.value, entry_id)

        if position < 0 or position >= len(volume):
            raise EntryNotFoundError(source.value, entry_id)

        return self._make_entry(volume, position)

    def warm_up(self, scope="ALL") -> int:
        """Load every available volume in scope. Returns how many were loaded."""
        count = 0
        for volume in self.volumes.load_all(resolve_scope(scope)):
            volume.index_for(MatchMode.VELTHUIS)
            count += 1
        return count

    @staticmethod
    def _make_entry(volume: Volume, position: int) -> DictEntry:
        headword = volume.headwords[position]
        return DictEntry(
            headword=headword,
            word_norm=normalize_word(headword),
            source=volume.source,
            entry_id=volume.entry_id(position),
            definition=render_definition(volume.source, volume.entries[position]),
        )


# =============================================================================
# Module-level Dictionary
# =============================================================================

_DICTIONARY: Optional[Dictionary] = None
_DICTIONARY_LOCK = threading.Lock()


def load_dictionary(path: Optional[Path] = None) -> Dictionary:
    """
    Load the shared dictionary.

    Args:
        path: Data directory. Uses PALIDICT_DATA_PATH or the bundled data if not specified.

    Returns:
        The shared Dictionary (the existing one if already loaded)
    """
    global _DICTIONARY

    with _DICTIONARY_LOCK:
        if _DICTIONARY is None:
            _DICTIONARY = Dictionary(data_path=path)
            logger.debug(f"Dictionary data path: {_DICTIONARY.settings.data_path}")
        return _DICTIONARY


def get_dictionary() -> Dictionary:
    """Get the shared dictionary, loading it with default settings if needed."""
    return load_dictionary()


def is_dictionary_loaded() -> bool:
    return _DICTIONARY is not None


def unload_dictionary():
    """Drop the shared dictionary and its cache."""
    global _DICTIONARY
    with _DICTIONARY_LOCK:
        if _DICTIONARY is not None:
            _DICTIONARY.cache.clear()
        _DICTIONARY = None


def swap_dictionary(dictionary: Optional[Dictionary]) -> Optional[Dictionary]:
    """Install dictionary as the shared one and return the one it replaces."""
    global _DICTIONARY
    with _DICTIONARY_LOCK:
        previous = _DICTIONARY
        _DICTIONARY = dictionary
        return previous
