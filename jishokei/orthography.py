"""
Orthography resolution for jishokei.

Maps a reconstructed form to its registered spellings. The orthography
index keys every known dictionary form (kanji and kana spellings alike) to
the list of canonical variants, so "たべる" and "食べる" can both resolve to
["食べる", "たべる"].
"""

import logging
from typing import List, Optional, Tuple

from jishokei.conjugations import reconstruct
from jishokei.rules import RuleStore

logger = logging.getLogger(__name__)


def resolve(store: RuleStore, candidate: str) -> Optional[Tuple[str, ...]]:
    """
    Look up the spelling variants of a candidate.

    Returns None when the candidate is not registered, which is different
    from a registered candidate with no variants (an empty tuple).
    """
    return store.orthography_index.get(candidate)


def reconstruct_with_orthography(store: RuleStore, text: str) -> List[str]:
    """
    Reverse inflection and keep only registered dictionary forms.

    Each candidate from ``reconstruct`` is resolved against the orthography
    index and its non-empty variants are collected in order. Candidates
    that are not registered contribute nothing.

    Args:
        store: Rule tables.
        text: Non-empty text.

    Returns:
        Deduplicated variant spellings, possibly empty.
    """
    candidates = reconstruct(store, text)
    logger.debug(f"all converted conjugate list: {candidates}")

    seen = set()
    result = []
    for candidate in candidates:
        variants = resolve(store, candidate)
        if variants is None:
            continue
        for variant in variants:
            if variant and variant not in seen:
                seen.add(variant)
                result.append(variant)

    return result


# Name used by the original plugin
convert_nonjishokei = reconstruct_with_orthography
