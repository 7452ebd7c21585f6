"""
Dictionary volume loading.

Each dictionary is split into numbered XML volumes:

    <data>/en/ped/0/ped.xml     <top><d>entry</d><d>entry</d>...</top>
    <data>/en/dppn/1.xml        <xml><e>entry</e><e>entry</e>...</xml>

A volume is parsed once into an ordered tuple of raw entry strings and kept
in the shared TTL cache. The position of an entry in that tuple is its ID.
"""

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, Tuple

from lxml import etree

from palidict.cache import TTLCache
from palidict.characters import to_fuzzy, to_velthuis
from palidict.errors import MissingVolumeError
from palidict.headwords import extract_headword
from palidict.matching import MatchMode
from palidict.raw_types import DictSource
from palidict.trie import HeadwordTrie

logger = logging.getLogger(__name__)

# Reader signature: (source, index) -> raw file bytes
VolumeReader = Callable[[DictSource, int], bytes]


# =============================================================================
# Volume
# =============================================================================

@dataclass(frozen=True)
class Volume:
    """
    One parsed dictionary volume.

    Headwords and the per-mode tries are derived on first use and cached on
    the instance. Entry order is file order and is never re-sorted.
    """
    source: DictSource
    index: int
    entries: Tuple[str, ...]

    @cached_property
    def headwords(self) -> Tuple[str, ...]:
        """Extracted headword per entry; "" for malformed entries."""
        return tuple(extract_headword(self.source, entry) for entry in self.entries)

    @cached_property
    def _tries(self) -> Dict[MatchMode, HeadwordTrie]:
        # All modes are built together
        velthuis = tuple(to_velthuis(word).lower() for word in self.headwords)
        return {
            MatchMode.VELTHUIS: HeadwordTrie(velthuis),
            MatchMode.UNICODE: HeadwordTrie(tuple(word.lower() for word in self.headwords)),
            MatchMode.FUZZY: HeadwordTrie(tuple(to_fuzzy(word) for word in self.headwords)),
        }

    def index_for(self, mode: MatchMode) -> HeadwordTrie:
        return self._tries[mode]

    def entry_id(self, position: int) -> str:
        return f"{self.index}/{position}"

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# Reading and Parsing
# =============================================================================

class FileVolumeReader:
    """Reads volume files from a data directory laid out like the corpus."""

    def __init__(self, data_path):
        self.data_path = Path(data_path)

    def path_for(self, source: DictSource, index: int) -> Path:
        return self.data_path / source.layout.path_template.format(index=index)

    def read(self, source: DictSource, index: int) -> bytes:
        path = self.path_for(source, index)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise MissingVolumeError(source.value, index, f"{path} not found")
        except OSError as e:
            raise MissingVolumeError(source.value, index, str(e))

    __call__ = read


def _inner_markup(element) -> str:
    """Text of an element plus its serialized children, like XML innerxml."""
    parts = [element.text or ""]
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def parse_volume(source: DictSource, index: int, payload: bytes) -> Volume:
    """
    Parse raw volume bytes into a Volume.

    Args:
        source: Dictionary the volume belongs to
        index: Volume number
        payload: File contents

    Returns:
        Volume with entries in document order

    Raises:
        MissingVolumeError: If the payload is not well-formed XML or has the wrong root
    """
    layout = source.layout
    parser = etree.XMLParser(resolve_entities=False, huge_tree=True)
    try:
        root = etree.fromstring(payload, parser)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Malformed XML in {source.value} volume {index}: {e}")
        raise MissingVolumeError(source.value, index, f"malformed XML: {e}")

    if root.tag != layout.root_tag:
        raise MissingVolumeError(
            source.value, index, f"expected <{layout.root_tag}> root, got <{root.tag}>"
        )

    entries = tuple(_inner_markup(el) for el in root.iterchildren(layout.entry_tag))
    return Volume(source=source, index=index, entries=entries)


# =============================================================================
# Volume Store
# =============================================================================

class VolumeStore:
    """
    Loads volumes through a reader and caches them by (source, index).

    Concurrent callers may both parse the same volume on a cold cache; the
    results are identical and whichever is stored last is kept.
    """

    def __init__(self, reader: VolumeReader, cache: TTLCache):
        self.reader = reader
        self.cache = cache

    @staticmethod
    def cache_key(source: DictSource, index: int) -> str:
        return f"{source.value.lower()}_vol:{index}"

    def load_volume(self, source: DictSource, index: int) -> Volume:
        """
        Load one volume, from cache when possible.

        Raises:
            MissingVolumeError: If the volume cannot be read or parsed
        """
        key = self.cache_key(source, index)
        volume = self.cache.get(key)
        if volume is not None:
            return volume

        payload = self.reader(source, index)
        volume = parse_volume(source, index, payload)
        logger.info(f"Loaded {source.value} volume {index} ({len(volume)} entries)")

        self.cache.set(key, volume)
        return volume

    def load_all(self, sources: Iterable[DictSource]) -> Iterator[Volume]:
        """Yield every readable volume of the given sources, skipping missing ones."""
        for source in sources:
            for index in source.volumes:
                try:
                    yield self.load_volume(source, index)
                except MissingVolumeError as e:
                    logger.debug(f"Skipping volume: {e}")
