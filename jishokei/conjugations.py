"""
Conjugation reversal for jishokei.

Reverses suffix inflection of a single string by swapping its last
character for the dictionary-form endings registered in the conjugation
rules. For example with the rule "っ" -> ["う", "つ", "る"], the te-form
stem "買っ" yields "買う", "買つ" and "買る".

No attempt is made to decide which candidate is a real word; that is the
job of the orthography index (see jishokei.orthography).
"""

import logging
from typing import Iterable, List

from jishokei.rules import RuleStore
from jishokei.settings import ICHIDAN_ENDING

logger = logging.getLogger(__name__)


def unique(values: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping the first occurrence of each value."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def split_last_char(text: str):
    """
    Split text into (stem, last character).

    Slicing is by code point, so a multi-byte final character such as "る"
    or "𠮟" stays intact. A single character has an empty stem.
    """
    return text[:-1], text[-1:]


def reconstruct(store: RuleStore, text: str) -> List[str]:
    """
    Get candidate dictionary forms for a possibly inflected string.

    Order of the result:
    1. text + "る" (ichidan stems such as 食べ, applied to every input)
    2. stem + ending for each ending registered for the last character
    3. text itself, which may already be a dictionary form

    Args:
        store: Rule tables.
        text: Non-empty text.

    Returns:
        Deduplicated candidates. Always contains text + "る" and text.
    """
    stem, last_char = split_last_char(text)

    candidates = [text + ICHIDAN_ENDING]
    logger.debug(f"add {candidates[0]} for v1")

    for ending in store.conjugation_rules.get(last_char, ()):
        candidates.append(stem + ending)
        logger.debug(f"add {stem + ending} for conjugate rule {last_char} -> {ending}")

    candidates.append(text)

    return unique(candidates)
