"""
Headword trie for fast exact and prefix lookup within one volume.

Each volume gets one index per matching mode. Keys are the match forms of
the headwords; each record stores the entry's position in the volume, so
a key shared by several homonyms maps to several records.
"""

from typing import Iterable, List, Sequence

import marisa_trie

# Record schema: entry index within the volume, uint32 little-endian
RECORD_FORMAT = "<I"


class HeadwordTrie:
    """
    Read-only index from match forms to entry positions.

    Empty forms (entries whose headword could not be extracted) are kept in
    ``forms`` so positions line up with the volume, but are never indexed.
    """

    def __init__(self, forms: Sequence[str]):
        self.forms = tuple(forms)
        self._trie = marisa_trie.RecordTrie(
            RECORD_FORMAT,
            [(form, (index,)) for index, form in enumerate(self.forms) if form],
        )

    def exact(self, key: str) -> List[int]:
        """Positions whose form equals key, in volume order."""
        if not key:
            return []
        return sorted(record[0] for record in self._trie.get(key, []))

    def with_prefix(self, prefix: str) -> List[int]:
        """Positions whose form starts with prefix (including equal), in volume order."""
        if not prefix:
            return []
        return sorted(record[0] for _, record in self._trie.items(prefix))

    def contains(self, key: str) -> bool:
        return bool(key) and key in self._trie

    def scan(self) -> Iterable[tuple]:
        """Yield (position, form) for every indexed entry, in volume order."""
        for index, form in enumerate(self.forms):
            if form:
                yield index, form

    def __len__(self) -> int:
        return len(self._trie)
