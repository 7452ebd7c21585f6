"""
Suffix-stripping stemmer for inflected Pali nouns.

Given an inflected form, produce the base forms it might come from:

    arahato   -> arahant, arahat, araha, arahata
    dhammassa -> dhamma, dhamm

The stemmer only proposes hypotheses. Checking them against the dictionary
is the analyzer's job.
"""

from typing import List, NamedTuple, Tuple


class NounEnding(NamedTuple):
    """An inflectional ending and the stem finals it may replace."""
    ending: str
    stems: Tuple[str, ...]


# =============================================================================
# Ending Table
# =============================================================================
# Grouped by stem class; within a class, endings are listed longest-first.
# Candidates are generated in table order, which is also their priority.

NOUN_ENDINGS: Tuple[NounEnding, ...] = (
    # -ant stems (arahant, bhagavant)
    NounEnding('ato', ('ant', 'at', 'a')),       # gen/abl sg: arahato
    NounEnding('atā', ('ant', 'at', 'a')),       # instr sg: arahatā
    NounEnding('antaṃ', ('ant', 'at', 'a')),     # acc sg: arahantaṃ
    NounEnding('ante', ('ant', 'at', 'a')),      # loc sg: arahante
    NounEnding('anto', ('ant', 'at', 'a')),      # nom pl: arahanto
    NounEnding('antānaṃ', ('ant', 'at', '')),    # gen pl
    NounEnding('antehi', ('ant', 'at', '')),     # instr pl
    NounEnding('antesu', ('ant', 'at', '')),     # loc pl

    # -a stems (dhamma, buddha)
    NounEnding('assa', ('a', '')),               # gen sg: dhammassa
    NounEnding('āya', ('a', 'ā')),               # dat sg: dhammāya
    NounEnding('asmā', ('a', '')),               # abl sg: dhammasmā
    NounEnding('amhā', ('a', '')),               # abl sg: dhammamhā
    NounEnding('asmiṃ', ('a', '')),              # loc sg: dhammasmiṃ
    NounEnding('amhi', ('a', '')),               # loc sg: dhammamhi
    NounEnding('ānaṃ', ('a', 'ā')),              # gen pl: dhammānaṃ
    NounEnding('ehi', ('a', '')),                # instr pl: dhammehi
    NounEnding('ebhi', ('a', '')),               # instr pl: dhammebhi
    NounEnding('esu', ('a', '')),                # loc pl: dhammesu
    NounEnding('ena', ('a', '')),                # instr sg: dhammena
    NounEnding('aṃ', ('a', '')),                 # acc sg: dhammaṃ
    NounEnding('āni', ('a', 'aṃ')),              # nom/acc pl neuter
    NounEnding('ā', ('a', '')),                  # nom pl / abl sg: dhammā
    NounEnding('e', ('a', 'i')),                 # loc sg / acc pl: dhamme
    NounEnding('o', ('a', '')),                  # nom sg: dhammo

    # -i stems (aggi, muni)
    NounEnding('ino', ('i', 'in')),              # gen sg: munino
    NounEnding('inaṃ', ('i', 'in')),             # acc sg
    NounEnding('inā', ('i', 'in')),              # instr sg
    NounEnding('īnaṃ', ('i', 'in')),             # gen pl
    NounEnding('īhi', ('i', 'in')),              # instr pl
    NounEnding('īsu', ('i', 'in')),              # loc pl
    NounEnding('ismiṃ', ('i', '')),              # loc sg
    NounEnding('imhi', ('i', '')),               # loc sg
    NounEnding('ī', ('i', 'in')),                # nom pl

    # -u stems (bhikkhu)
    NounEnding('uno', ('u', '')),                # gen sg
    NounEnding('unaṃ', ('u', '')),               # acc sg
    NounEnding('unā', ('u', '')),                # instr sg
    NounEnding('ūnaṃ', ('u', '')),               # gen pl
    NounEnding('ūhi', ('u', '')),                # instr pl
    NounEnding('ūsu', ('u', '')),                # loc pl
    NounEnding('usmiṃ', ('u', '')),              # loc sg
    NounEnding('umhi', ('u', '')),               # loc sg
)

# Shortest stem left after removing an ending
MIN_STEM_LENGTH = 2


def stem_candidates(word: str) -> List[str]:
    """
    Generate possible dictionary forms for an inflected word.

    Args:
        word: The word as queried (callers lower-case it first)

    Returns:
        List whose first element is ``word`` itself, followed by each
        stem hypothesis in table order, without duplicates

    Example:
        >>> stem_candidates("arahato")
        ['arahato', 'arahant', 'arahat', 'araha', 'arahata']
    """
    candidates = [word]
    seen = {word}

    for ending, stems in NOUN_ENDINGS:
        if not word.endswith(ending):
            continue
        stem = word[:-len(ending)]
        if len(stem) < MIN_STEM_LENGTH:
            continue
        for add in stems:
            candidate = stem + add
            if candidate not in seen:
                seen.add(candidate)
                candidates.append(candidate)

    return candidates
