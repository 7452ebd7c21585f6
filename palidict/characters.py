"""
Character utilities for Pali text.

Pali is written in two interchangeable orthographies:

- Unicode with diacritics:  dhammacakkappavattana, nibbāna, saṃgha
- Velthuis ASCII digraphs:  nibbaana, sa.mgha, "nk for ṅk, ~n for ñ

This module converts between the two and provides the lossy "fuzzy" form
used to decide whether two spellings denote the same word.
"""

import re
import unicodedata
from typing import Dict, Pattern

# =============================================================================
# Transliteration Tables
# =============================================================================

UNICODE_TO_VELTHUIS: Dict[str, str] = {
    'ā': 'aa', 'ī': 'ii', 'ū': 'uu',
    'ṭ': '.t', 'ḍ': '.d', 'ṅ': '"n',
    'ṇ': '.n', 'ṃ': '.m', 'ṁ': '.m',
    'ñ': '~n', 'ḷ': '.l',
    'Ā': 'AA', 'Ī': 'II', 'Ū': 'UU',
    'Ṭ': '.T', 'Ḍ': '.D', 'Ṅ': '"N',
    'Ṇ': '.N', 'Ṃ': '.M', 'Ṁ': '.M',
    'Ñ': '~N', 'Ḷ': '.L',
    # Sanskrit additions
    'ḹ': '.ll', 'ṛ': '.r', 'ṝ': '.rr',
    'ṣ': '.s', 'ś': '"s', 'ḥ': '.h',
}

VELTHUIS_TO_UNICODE: Dict[str, str] = {
    'aa': 'ā', 'ii': 'ī', 'uu': 'ū',
    '.t': 'ṭ', '.d': 'ḍ', '.n': 'ṇ',
    '.m': 'ṃ', '.l': 'ḷ',
    '"nk': 'ṅk', '"ng': 'ṅg', '"n': 'ṅ',
    '~n': 'ñ',
    'AA': 'Ā', 'II': 'Ī', 'UU': 'Ū',
    '.T': 'Ṭ', '.D': 'Ḍ', '.N': 'Ṇ',
    '.M': 'Ṃ', '.L': 'Ḷ',
    '"N': 'Ṅ', '~N': 'Ñ',
    # Sanskrit additions
    '.ll': 'ḹ', '.r': 'ṛ', '.rr': 'ṝ',
    '.s': 'ṣ', '"s': 'ś', '.h': 'ḥ',
}

PALI_DIACRITICS = frozenset('āīūṭḍṅṇṃṁñḷĀĪŪṬḌṄṆṂṀÑḶ')

# Diacritic-free approximations used for DictEntry.word_norm
ASCII_FOLD: Dict[str, str] = {
    'ā': 'a', 'ī': 'i', 'ū': 'u',
    'ṭ': 't', 'ḍ': 'd', 'ṇ': 'n',
    'ṅ': 'n', 'ñ': 'n', 'ṃ': 'm', 'ṁ': 'm',
    'ḷ': 'l',
    # Velthuis in case it's mixed in
    'aa': 'a', 'ii': 'i', 'uu': 'u',
}

VOWELS = frozenset('aāiīuūeo')
LONG_VOWELS: Dict[str, str] = {'ā': 'a', 'ī': 'i', 'ū': 'u'}
CONSONANTS = frozenset('kgcjṭḍtdpbmnyrlvsh')


def _compile_table(table: Dict[str, str]) -> Pattern[str]:
    # Longest pattern first, so ".rr" wins over ".r" and '"nk' over '"n'
    keys = sorted(table, key=len, reverse=True)
    return re.compile('|'.join(re.escape(k) for k in keys))


_VELTHUIS_RE = _compile_table(UNICODE_TO_VELTHUIS)
_UNICODE_RE = _compile_table(VELTHUIS_TO_UNICODE)
_ASCII_FOLD_RE = _compile_table(ASCII_FOLD)


# =============================================================================
# Conversion
# =============================================================================

def to_velthuis(text: str) -> str:
    """
    Convert Unicode Pali text to Velthuis notation.

    Example:
        >>> to_velthuis("nibbāna")
        'nibbaana'
    """
    if not text:
        return text
    return _VELTHUIS_RE.sub(lambda m: UNICODE_TO_VELTHUIS[m.group(0)], text)


def to_unicode(text: str) -> str:
    """
    Convert Velthuis notation to Unicode Pali text.

    The Sanskrit extensions do not round-trip reliably: ".ll" is read as
    vocalic ḹ, so a retroflex ḷ followed by l comes back differently.

    Example:
        >>> to_unicode('sa"ngha')
        'saṅgha'
    """
    if not text:
        return text
    return _UNICODE_RE.sub(lambda m: VELTHUIS_TO_UNICODE[m.group(0)], text)


# =============================================================================
# Matching Forms
# =============================================================================

_MARKER_RE = re.compile(r'[.~"]+(?=[a-z])')
_LONG_VOWEL_RE = re.compile(r'([aiu])\1+')
_DOUBLE_CONSONANT_RE = re.compile(r'([b-df-hj-np-tv-z])\1+')
_STOP_CLUSTER_RE = re.compile(r'([kgcjtdpb])[kgcjtdpbh]+')


def to_fuzzy(text: str) -> str:
    """
    Reduce a word to its fuzzy matching form.

    Lowercases, converts to Velthuis, drops the retroflex/nasal markers,
    shortens long vowels, undoubles consonants and reduces aspirated or
    doubled stops to the bare stop. The result is only ever compared with
    other fuzzy forms; it is not meant for display.

    Applying it twice gives the same result as applying it once.

    Example:
        >>> to_fuzzy("Dhammā")
        'dama'
    """
    if not text:
        return text
    w = to_velthuis(text.lower()).lower()
    w = _MARKER_RE.sub('', w)
    w = _LONG_VOWEL_RE.sub(r'\1', w)
    w = _DOUBLE_CONSONANT_RE.sub(r'\1', w)
    w = _STOP_CLUSTER_RE.sub(r'\1', w)
    return w


def normalize_word(word: str) -> str:
    """Lowercase a word and strip its diacritics."""
    return _ASCII_FOLD_RE.sub(lambda m: ASCII_FOLD[m.group(0)], word.lower())


def has_unicode_chars(text: str) -> bool:
    """Check if text uses the diacritic orthography."""
    return any(char in PALI_DIACRITICS for char in text)


def normalize_query(text: str) -> str:
    """NFC-normalize, trim and lowercase a raw query."""
    return unicodedata.normalize('NFC', text).strip().lower()
