"""
Headword extraction and definition rendering for raw dictionary entries.

PED entries are (possibly entity-escaped) HTML whose headword is the leading
bold span:

    <b>Akkha<sup>2</sup></b> [Vedic akṣa] a die ...

DPPN entries use bracket markup:

    [div class="huge"]Abhaya[/div][p]...[/p]
"""

import html
import re
from typing import Callable, Dict

from palidict.raw_types import DictSource

# =============================================================================
# PED
# =============================================================================

PED_HEADWORD_RE = re.compile(r'^\s*<b>(.+?)</b>', re.DOTALL)
SUPERSCRIPT_RE = re.compile(r'<sup>[^<]*</sup>')
TAG_RE = re.compile(r'<[^>]+>')
WHITESPACE_RE = re.compile(r'\s+')
# "--" or an em dash left dangling at the end marks a bound compound prefix
TRAILING_SEPARATOR_RE = re.compile(r'(?:\s*(?:--|—))+$')


def extract_ped_headword(entry: str) -> str:
    """
    Extract the headword from a PED entry.

    Homonym superscripts are removed ("Akkha<sup>2</sup>" -> "Akkha"), and a
    trailing compound separator is dropped ("dhamma -- " -> "dhamma"), but a
    spaced compound headword such as "dhamma -- cakka" is kept whole.

    Args:
        entry: Raw entry markup

    Returns:
        The headword, or "" if the entry has no leading bold span
    """
    decoded = html.unescape(entry)
    match = PED_HEADWORD_RE.match(decoded)
    if not match:
        return ""

    word = SUPERSCRIPT_RE.sub('', match.group(1))
    word = TAG_RE.sub('', word)
    word = WHITESPACE_RE.sub(' ', word).strip()
    word = TRAILING_SEPARATOR_RE.sub('', word)
    return word.strip()


def render_ped_definition(entry: str) -> str:
    return html.unescape(entry).strip()


# =============================================================================
# DPPN
# =============================================================================

DPPN_TITLE_RE = re.compile(r'\[div class="huge"\]([^\[]+)\[/div\]')
DPPN_BOLD_RE = re.compile(r'\[b\]([^\[]+)\[/b\]')
DPPN_DIV_OPEN_RE = re.compile(r'\[div class="([^"]+)"\]')
DPPN_ANCHOR_OPEN_RE = re.compile(r'\[a href="[^"]*"[^\]]*\]')


def extract_dppn_headword(entry: str) -> str:
    """Extract the headword from a DPPN entry (title div, else first bold span)."""
    for pattern in (DPPN_TITLE_RE, DPPN_BOLD_RE):
        match = pattern.search(entry)
        if match:
            return match.group(1).strip()
    return ""


def render_dppn_definition(entry: str) -> str:
    """Convert DPPN bracket markup to HTML, keeping only the text of links."""
    rendered = DPPN_DIV_OPEN_RE.sub(r'<div class="\1">', entry)
    rendered = rendered.replace('[/div]', '</div>')
    rendered = rendered.replace('[p]', '<p>').replace('[/p]', '</p>')
    rendered = rendered.replace('[b]', '<b>').replace('[/b]', '</b>')
    rendered = DPPN_ANCHOR_OPEN_RE.sub('', rendered)
    rendered = rendered.replace('[/a]', '')
    return rendered.strip()


# =============================================================================
# Dispatch
# =============================================================================

HEADWORD_EXTRACTORS: Dict[DictSource, Callable[[str], str]] = {
    DictSource.PED: extract_ped_headword,
    DictSource.DPPN: extract_dppn_headword,
}

DEFINITION_RENDERERS: Dict[DictSource, Callable[[str], str]] = {
    DictSource.PED: render_ped_definition,
    DictSource.DPPN: render_dppn_definition,
}


def extract_headword(source: DictSource, entry: str) -> str:
    """
    Extract the headword of a raw entry in the given source's format.

    An empty string means the entry is malformed; it is skipped during
    matching but does not affect the rest of its volume.
    """
    return HEADWORD_EXTRACTORS[source](entry)


def render_definition(source: DictSource, entry: str) -> str:
    """Render a raw entry as display HTML."""
    return DEFINITION_RENDERERS[source](entry)
