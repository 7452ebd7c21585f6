"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import List

import pytest

from palidict.analyzer import Analyzer
from palidict.characters import normalize_word
from palidict.config import Settings
from palidict.dictionary import Dictionary, unload_dictionary
from palidict.raw_types import DictEntry, DictSource


# Entries are XML fragments; entity-escaped markup is kept escaped in the file
PED_VOLUME_0 = [
    '<b>Dhamma</b> doctrine, nature, law.',        # 0/0
    '<b>Cakka</b> a wheel.',                        # 0/1
    '<b>Arahant</b> a worthy one.',                 # 0/2
    '<b>Saddhamma</b> the true doctrine.',          # 0/3
    '<b>Akkha<sup>2</sup></b> a die.',              # 0/4
    'an entry without a headword',                  # 0/5
    '<b>Tathā</b> thus, so.',                       # 0/6
    '<b>Āgata</b> come, arrived.',                  # 0/7
]

PED_VOLUME_1 = [
    '<b>Dhammā</b> variant spelling used in verse.',       # 1/0
    '&lt;b&gt;Khandha&lt;/b&gt; bulk, aggregate.',        # 1/1
    '<b>Buddha</b> awakened.',                             # 1/2
    '<b>Abhaya</b> fearless.',                             # 1/3
]

DPPN_VOLUME_1 = [
    '[div class="huge"]Abhaya[/div][p]Son of [a href="/dppn/bimbisara"]Bimbisāra[/a].[/p]',
    "[b]Ānanda[/b] the Buddha's attendant.",
]


def write_volume(root: Path, source: DictSource, index: int, entries: List[str]) -> Path:
    """Write one volume file in the corpus layout and return its path."""
    layout = source.layout
    path = root / layout.path_template.format(index=index)
    path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"<{layout.entry_tag}>{entry}</{layout.entry_tag}>\n" for entry in entries)
    path.write_text(
        f'<?xml version="1.0" encoding="UTF-8"?>\n<{layout.root_tag}>\n{body}</{layout.root_tag}>\n',
        encoding="utf-8",
    )
    return path


def make_entry(headword: str, source: DictSource = DictSource.PED, entry_id: str = "0/0") -> DictEntry:
    return DictEntry(
        headword=headword,
        word_norm=normalize_word(headword),
        source=source,
        entry_id=entry_id,
        definition="",
    )


@pytest.fixture
def data_path(tmp_path):
    """A corpus with PED volumes 0-1 and DPPN volume 1; every other volume is missing."""
    write_volume(tmp_path, DictSource.PED, 0, PED_VOLUME_0)
    write_volume(tmp_path, DictSource.PED, 1, PED_VOLUME_1)
    write_volume(tmp_path, DictSource.DPPN, 1, DPPN_VOLUME_1)
    return tmp_path


@pytest.fixture
def settings(data_path):
    return Settings(data_path=data_path)


@pytest.fixture
def dictionary(settings):
    return Dictionary(settings=settings)


@pytest.fixture
def analyzer(dictionary):
    return Analyzer(dictionary)


@pytest.fixture
def shared_dictionary(data_path):
    """Load the module-level dictionary from the test corpus."""
    import palidict
    from palidict.dictionary import load_dictionary

    unload_dictionary()
    dictionary = load_dictionary(data_path)
    yield dictionary
    palidict.shutdown()
    unload_dictionary()
