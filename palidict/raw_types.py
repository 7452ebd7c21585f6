"""
Lightweight data structures for dictionary lookups.

Everything here is immutable once built. Entries and analyses are created
fresh for each lookup and are safe to share between threads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Tuple


# =============================================================================
# Dictionary Sources
# =============================================================================

class VolumeLayout(NamedTuple):
    """Where a source's volumes live and how their XML is shaped."""
    first: int
    last: int
    root_tag: str
    entry_tag: str
    path_template: str


class DictSource(str, Enum):
    """Dictionary corpora known to the engine."""
    PED = "PED"    # Pali-English Dictionary
    DPPN = "DPPN"  # Dictionary of Pali Proper Names

    @property
    def layout(self) -> VolumeLayout:
        return VOLUME_LAYOUTS[self]

    @property
    def volumes(self) -> range:
        """Volume indices for this source, in search order."""
        return range(self.layout.first, self.layout.last + 1)

    @classmethod
    def parse(cls, name: str) -> "DictSource":
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ValueError(f"unknown dictionary source: {name!r}")


VOLUME_LAYOUTS: Dict[DictSource, VolumeLayout] = {
    DictSource.PED: VolumeLayout(0, 4, "top", "d", "en/ped/{index}/ped.xml"),
    DictSource.DPPN: VolumeLayout(1, 9, "xml", "e", "en/dppn/{index}.xml"),
}

# Scope names accepted in addition to the individual sources
ALL_SCOPE_NAMES = frozenset(["ALL", "MULTI"])


def resolve_scope(scope: Any) -> Tuple[DictSource, ...]:
    """
    Resolve a scope name to the sources it covers.

    Args:
        scope: A DictSource, a source name, "ALL"/"MULTI", or an iterable of sources

    Returns:
        Tuple of sources in search order (PED before DPPN)

    Raises:
        ValueError: If the scope names an unknown source
    """
    if isinstance(scope, DictSource):
        return (scope,)
    if isinstance(scope, str):
        if scope.strip().upper() in ALL_SCOPE_NAMES:
            return tuple(DictSource)
        return (DictSource.parse(scope),)
    sources = tuple(s if isinstance(s, DictSource) else DictSource.parse(s) for s in scope)
    if not sources:
        raise ValueError("scope must name at least one dictionary source")
    return sources


# =============================================================================
# Entries and Analysis Results
# =============================================================================

@dataclass(frozen=True, slots=True)
class DictEntry:
    """
    A dictionary entry resolved from a volume.

    Attributes:
        headword: The headword as displayed (e.g. "Akkha")
        word_norm: Lowercase headword without diacritics
        source: Dictionary the entry belongs to
        entry_id: "volume/index" within that dictionary
        definition: Entry body rendered as HTML
    """
    headword: str
    word_norm: str
    source: DictSource
    entry_id: str
    definition: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "word": self.headword,
            "definition": self.definition,
            "source": self.source.value,
            "id": self.entry_id,
            "wordNorm": self.word_norm,
        }


@dataclass(frozen=True, slots=True)
class LookupQuery:
    """Input to a lookup."""
    text: str
    fuzzy: bool = False
    starts_with_only: bool = False
    scope: str = "PED"
    analyze: bool = True


@dataclass(frozen=True, slots=True)
class WordPart:
    """
    One member of a decomposed word.

    Attributes:
        surface: The text as it appeared in the query
        base: The restored dictionary form
    """
    surface: str
    base: str

    def __repr__(self) -> str:
        if self.surface == self.base:
            return f"WordPart({self.surface!r})"
        return f"WordPart({self.surface!r}, base={self.base!r})"


@dataclass(frozen=True, slots=True)
class CompoundPart:
    """A decomposed member together with its dictionary hits."""
    part: WordPart
    results: Tuple[DictEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.part.surface,
            "base": self.part.base,
            "results": [entry.to_dict() for entry in self.results],
        }


@dataclass(frozen=True)
class CompoundAnalysis:
    """
    Result of analyzing a query.

    ``breakdown`` is only populated when ``is_compound`` is true, which in
    turn requires at least one member to have produced a dictionary hit.
    """
    query: str
    results: Tuple[DictEntry, ...] = ()
    is_compound: bool = False
    breakdown: Tuple[CompoundPart, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return bool(self.results) or self.is_compound

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "query": self.query,
            "results": [entry.to_dict() for entry in self.results],
        }
        if self.is_compound:
            data["isCompound"] = True
            data["breakdown"] = [part.to_dict() for part in self.breakdown]
        return data

    def headwords(self) -> List[str]:
        return [entry.headword for entry in self.results]
