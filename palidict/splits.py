"""
Compound decomposition for Pali words.

Pali writes compounds and enclitic particles as one word, with sandhi
(sound changes) at the joins:

    dhammacakka  -> dhamma + cakka
    tathāgata    -> tathā + āgata
    dhammañca    -> dhammaṃ + ca      (ṃ + c written as ñc)

Decomposition runs in two stages. A trailing particle is peeled off first;
the remainder is then split recursively, each split point scored by how many
of its two sides the dictionary attests.

Dictionary access goes through an injected ``probe`` callable, so this
module has no knowledge of volumes or caches.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Tuple

from palidict.characters import CONSONANTS, LONG_VOWELS, VOWELS
from palidict.raw_types import WordPart

logger = logging.getLogger(__name__)

# probe(word) -> True if the dictionary has the word as a headword
Probe = Callable[[str], bool]


# =============================================================================
# Particle Table
# =============================================================================

class Particle(NamedTuple):
    """An enclitic particle as written, and its dictionary form."""
    surface: str
    base: str


# Scanned in this order; the first particle that fits is stripped
PARTICLES: Tuple[Particle, ...] = (
    Particle('ca', 'ca'),        # and
    Particle('pi', 'pi'),        # also, even
    Particle('eva', 'eva'),      # indeed, just
    Particle('kho', 'kho'),      # indeed (emphatic)
    Particle('pana', 'pana'),    # but, however
    Particle('hi', 'hi'),        # for, because
    Particle('tu', 'tu'),        # but
    Particle('va', 'vā'),        # or
    Particle('ti', 'ti'),        # quotation marker
    Particle('ce', 'ce'),        # if
    Particle('ve', 've'),        # indeed
    Particle('nu', 'nu'),        # interrogative
    Particle('su', 'su'),        # well
)

# ṃ before a palatal is written ñ: taṃ + ca -> tañca
NASAL_LIAISON = 'ñ'
ANUSVARA = 'ṃ'

# A plain particle suffix needs this much stem beyond the particle's length
PLAIN_SUFFIX_MARGIN = 2


def strip_trailing_particle(word: str) -> Tuple[str, Optional[WordPart]]:
    """
    Peel one enclitic particle off the end of a word.

    For the first particle in table order that fits, the first of these
    joins that applies is used:

    1. nasal liaison: ``...ñca`` -> ``...ṃ`` + ca
    2. doubled initial consonant: ``...kkho`` -> ``...`` + kho
       (not for particles starting with a vowel)
    3. plain suffix: ``...ca`` -> ``...`` + ca, only when the stem is
       longer than the particle by more than two characters

    Args:
        word: Lower-cased word

    Returns:
        (remainder, particle part) or (word, None) if no particle fits
    """
    for particle in PARTICLES:
        surface = particle.surface
        part = WordPart(surface=surface, base=particle.base)

        nasal = NASAL_LIAISON + surface
        if word.endswith(nasal) and len(word) > len(nasal):
            return word[:-len(nasal)] + ANUSVARA, part

        if surface[0] not in VOWELS:
            doubled = surface[0] + surface
            if word.endswith(doubled) and len(word) > len(doubled):
                return word[:-len(doubled)], part

        if word.endswith(surface):
            stem = word[:-len(surface)]
            if len(stem) > len(surface) + PLAIN_SUFFIX_MARGIN:
                return stem, part

    return word, None


# =============================================================================
# Split Points and Sandhi
# =============================================================================

@dataclass(frozen=True, slots=True)
class SplitCandidate:
    """One way of reading a word as left + right."""
    left: WordPart
    right: WordPart


# Compounds shorter than this are never split
MIN_SPLIT_LENGTH = 4
# Shortest left member considered
MIN_LEFT_LENGTH = 2

# Points awarded for each attested side of a split
ATTESTED_SCORE = 10


def is_valid_split_point(word: str, i: int) -> bool:
    """Check that offset i sits next to a vowel (compounds join at syllable edges)."""
    if i <= 0 or i >= len(word):
        return False
    return word[i - 1] in VOWELS or word[i] in VOWELS


def sandhi_candidates(left: str, right: str) -> List[SplitCandidate]:
    """
    Generate base-form readings of a split.

    Readings, in order:

    - as written
    - final long vowel of left shortened (tathā + gata -> tatha + gata)
    - final long vowel of left carried into right (tathā + gata -> tathā + āgata)
    - final o of left read as the stem vowel a
    - consonant doubled across the join dropped from left
    """
    candidates = [SplitCandidate(WordPart(left, left), WordPart(right, right))]
    if not left or not right:
        return candidates

    last = left[-1]
    first = right[0]

    short = LONG_VOWELS.get(last)
    if short is not None:
        candidates.append(SplitCandidate(WordPart(left, left[:-1] + short), WordPart(right, right)))
        candidates.append(SplitCandidate(WordPart(left, left), WordPart(right, last + right)))

    if last == 'o':
        candidates.append(SplitCandidate(WordPart(left, left[:-1] + 'a'), WordPart(right, right)))

    if first in CONSONANTS and last == first:
        candidates.append(SplitCandidate(WordPart(left, left[:-1]), WordPart(right, right)))

    return candidates


# =============================================================================
# Decomposer
# =============================================================================

class Decomposer:
    """
    Splits words into dictionary-attested members.

    Every split point is tried and scored against the dictionary, so one
    call makes O(len(word)^2) probes. That is fine for interactive lookups;
    callers should cache the probe.
    """

    def __init__(self, probe: Probe):
        self.probe = probe

    def score(self, candidate: SplitCandidate) -> int:
        """Score a reading: +10 for each side the dictionary attests."""
        score = 0
        if self.probe(candidate.left.base):
            score += ATTESTED_SCORE
        if self.probe(candidate.right.base):
            score += ATTESTED_SCORE
        return score

    def best_split(self, word: str) -> Optional[SplitCandidate]:
        """
        Find the highest-scoring reading of word as two members.

        Offsets are scanned left to right and only a strictly better score
        replaces the current best, so ties go to the earliest split.

        Returns:
            The best candidate, or None if nothing scored above zero
        """
        if len(word) < MIN_SPLIT_LENGTH:
            return None

        best: Optional[SplitCandidate] = None
        best_score = 0

        for i in range(MIN_LEFT_LENGTH, len(word) - 1):
            if not is_valid_split_point(word, i):
                continue
            for candidate in sandhi_candidates(word[:i], word[i:]):
                score = self.score(candidate)
                if score > best_score:
                    best_score = score
                    best = candidate

        return best

    def find_compound_breaks(self, word: str) -> List[WordPart]:
        """
        Split word into members, left to right.

        Each round fixes the left member of the best split and continues on
        the right member's base form. The word shrinks every round, so the
        loop always ends.

        Returns:
            Members in order; a single whole-word part if nothing scores
        """
        parts: List[WordPart] = []
        remaining = WordPart(word, word)

        while True:
            split = self.best_split(remaining.base)
            if split is None:
                parts.append(remaining)
                break
            parts.append(split.left)
            remaining = split.right

        return parts

    def decompose(self, word: str) -> List[WordPart]:
        """
        Break a word into compound members plus any trailing particle.

        Args:
            word: Lower-cased word

        Returns:
            Parts in reading order; the trailing particle, if any, comes last
        """
        remaining, particle = strip_trailing_particle(word)
        parts = self.find_compound_breaks(remaining)
        if particle is not None:
            parts.append(particle)

        logger.debug(f"Decomposed {word!r} -> {parts}")
        return parts
