"""
palidict: Pali dictionary lookup and morphological analysis

Looks words up in the Pali-English Dictionary (PED) and the Dictionary of
Pali Proper Names (DPPN). Inflected forms are stemmed and compounds are
split into their members when a word is not found as written.

Basic Usage:
    import palidict

    analysis = palidict.lookup("dhammacakka")
    if analysis.is_compound:
        for part in analysis.breakdown:
            print(part.part.surface, [e.headword for e in part.results])
    else:
        for entry in analysis.results:
            print(entry.headword, entry.entry_id)
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from palidict.characters import to_fuzzy, to_unicode, to_velthuis
from palidict.errors import (
    AnalysisTimeoutError,
    EmptyQueryError,
    EntryNotFoundError,
    MissingVolumeError,
    PalidictError,
)
from palidict.raw_types import (
    CompoundAnalysis,
    CompoundPart,
    DictEntry,
    DictSource,
    LookupQuery,
    WordPart,
)

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def lookup(
    query: str,
    scope: str = "PED",
    fuzzy: bool = False,
    starts_with_only: bool = False,
    analyze: bool = True,
) -> CompoundAnalysis:
    """
    Look up a Pali word in the shared dictionary.

    This is the main entry point.

    Args:
        query: Word in Unicode ("dhammā") or Velthuis ("dhammaa") spelling
        scope: "PED", "DPPN" or "ALL"
        fuzzy: Ignore diacritics, vowel length and doubled consonants
        starts_with_only: Only accept exact and prefix matches
        analyze: Fall back to stemming and compound splitting

    Returns:
        CompoundAnalysis with either direct results or a compound breakdown

    Raises:
        EmptyQueryError: If query is empty or whitespace-only

    Example:
        >>> import palidict
        >>> analysis = palidict.lookup("dhammassa")
        >>> analysis.headwords()
        ['Dhamma']
    """
    if not query or not query.strip():
        raise EmptyQueryError("query must be non-empty and not whitespace-only")

    from palidict.analyzer import Analyzer
    return Analyzer().lookup(query, scope, fuzzy, starts_with_only, analyze)


def entry_by_id(source: str, entry_id: str) -> DictEntry:
    """
    Fetch a single entry by its ID.

    Args:
        source: "PED" or "DPPN"
        entry_id: "volume/index", as found in DictEntry.entry_id

    Raises:
        EntryNotFoundError: If the ID does not resolve to an entry
    """
    from palidict.dictionary import get_dictionary
    return get_dictionary().entry_by_id(source, entry_id)


def warm_up(verbose: bool = False, scope: str = "ALL") -> Tuple[float, dict]:
    """
    Pre-load dictionary volumes and build their headword indexes.

    Args:
        verbose: If True, print timing information
        scope: Which dictionaries to load

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    from palidict.dictionary import load_dictionary

    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading palidict volumes...")

    t0 = time.perf_counter()
    dictionary = load_dictionary()
    count = dictionary.warm_up(scope)
    timings['volumes'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Volumes:        {timings['volumes']:>7.1f}ms ({count} loaded)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Batch and Async API
# =============================================================================

_executor = None
_executor_lock = None


def _get_executor():
    """Get or create the thread pool executor."""
    global _executor, _executor_lock
    import threading
    from concurrent.futures import ThreadPoolExecutor

    if _executor_lock is None:
        _executor_lock = threading.Lock()

    with _executor_lock:
        if _executor is None:
            from palidict.dictionary import get_dictionary
            workers = get_dictionary().settings.max_workers
            _executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="palidict")

    return _executor


def lookup_many(
    queries: Iterable[str],
    scope: str = "PED",
    fuzzy: bool = False,
    starts_with_only: bool = False,
    analyze: bool = True,
) -> List[CompoundAnalysis]:
    """
    Look up several words concurrently.

    At most ``max_workers`` lookups run at once (PALIDICT_MAX_WORKERS).

    Returns:
        One CompoundAnalysis per query, in input order

    Raises:
        EmptyQueryError: If any query is blank
    """
    queries = list(queries)
    for query in queries:
        if not query or not query.strip():
            raise EmptyQueryError("query must be non-empty and not whitespace-only")

    executor = _get_executor()
    futures = [
        executor.submit(lookup, query, scope, fuzzy, starts_with_only, analyze)
        for query in queries
    ]
    return [future.result() for future in futures]


async def lookup_async(
    query: str,
    scope: str = "PED",
    fuzzy: bool = False,
    starts_with_only: bool = False,
    analyze: bool = True,
    timeout: float = 30.0,
) -> CompoundAnalysis:
    """
    Look up a word asynchronously.

    Args:
        query: Word to look up
        scope: "PED", "DPPN" or "ALL"
        fuzzy: Ignore diacritics, vowel length and doubled consonants
        starts_with_only: Only accept exact and prefix matches
        analyze: Fall back to stemming and compound splitting
        timeout: Maximum time in seconds (default 30s)

    Returns:
        CompoundAnalysis

    Raises:
        AnalysisTimeoutError: If the lookup exceeds timeout
        EmptyQueryError: If query is blank

    Example:
        >>> import asyncio
        >>> analysis = asyncio.run(palidict.lookup_async("buddho"))
    """
    import asyncio

    loop = asyncio.get_running_loop()
    executor = _get_executor()

    try:
        future = loop.run_in_executor(
            executor, lambda: lookup(query, scope, fuzzy, starts_with_only, analyze)
        )
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise AnalysisTimeoutError(f"Lookup timed out after {timeout}s")


def shutdown():
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=True)
        _executor = None


# =============================================================================
# Session Context (for batch processing)
# =============================================================================

@contextmanager
def session_context(data_path: Optional[str] = None):
    """
    Context manager for a batch of lookups.

    Lookups inside the block use the dictionary at data_path. A shared
    dictionary loaded from another directory is set aside for the block
    and restored on exit; one already loaded from data_path (or any loaded
    one, when data_path is None) is reused and left loaded. The thread
    pool is always shut down on exit.

    Example:
        >>> with palidict.session_context("/srv/pali-data"):
        ...     for word in words:
        ...         analysis = palidict.lookup(word)
    """
    from palidict.dictionary import (
        Dictionary,
        get_dictionary,
        is_dictionary_loaded,
        load_dictionary,
        swap_dictionary,
    )

    previous = None
    owned = False
    if data_path is None:
        owned = not is_dictionary_loaded()
        session = load_dictionary()
    elif is_dictionary_loaded() and get_dictionary().settings.data_path == Path(data_path):
        session = get_dictionary()
    else:
        session = Dictionary(data_path=Path(data_path))
        previous = swap_dictionary(session)
        owned = True

    # The pool is sized from the active dictionary's settings
    shutdown()
    try:
        yield
    finally:
        shutdown()
        if owned:
            session.cache.clear()
            swap_dictionary(previous)


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "CompoundAnalysis",
    "CompoundPart",
    "DictEntry",
    "DictSource",
    "LookupQuery",
    "WordPart",
    # Sync API
    "lookup",
    "entry_by_id",
    "warm_up",
    "get_version",
    # Transliteration
    "to_fuzzy",
    "to_unicode",
    "to_velthuis",
    # Batch and async API
    "lookup_many",
    "lookup_async",
    "shutdown",
    "session_context",
    # Exceptions
    "PalidictError",
    "AnalysisTimeoutError",
    "EmptyQueryError",
    "EntryNotFoundError",
    "MissingVolumeError",
    # Version
    "__version__",
]
