"""
Window scanning and ranking for jishokei.

The scanner looks at every prefix of the input (the text after the cursor),
from one character up to the whole string, and collects what each prefix
resolves to. Longer prefixes win: a compound verb such as 取り出した should
rank 取り出す above 取る, which only the first two characters produce.

Example:
    >>> from jishokei.rules import load_default_rule_store
    >>> from jishokei.scan import Scanner
    >>> scanner = Scanner(load_default_rule_store())
    >>> scanner.scan("食べた")
    ['食べる', 'たべる', '食べた']
"""

import logging
from typing import Iterable, Iterator, List, Sequence

from jishokei.conjugations import unique
from jishokei.orthography import reconstruct_with_orthography
from jishokei.rules import RuleStore

logger = logging.getLogger(__name__)


def iter_windows(text: str) -> Iterator[str]:
    """Yield the prefixes of text, shortest first."""
    for length in range(1, len(text) + 1):
        yield text[:length]


def scan_windows(store: RuleStore, text: str) -> List[List[str]]:
    """
    Collect candidates for every window of the input.

    Each window yields one batch: its special-rule outputs first, then
    whatever reconstruct_with_orthography finds for it. Batches come in
    ascending window length and may repeat values.

    Args:
        store: Rule tables.
        text: Input text. Empty text has no windows.

    Returns:
        One list of candidates per window.
    """
    batches = []
    for window in iter_windows(text):
        batch = list(store.special_rules.get(window, ()))
        if batch:
            logger.debug(f"special rule {window} -> {batch}")
        batch.extend(reconstruct_with_orthography(store, window))
        logger.debug(f"window {window}: {batch}")
        batches.append(batch)
    return batches


def rank(batches: Sequence[Iterable[str]], original_input: str) -> List[str]:
    """
    Order and deduplicate scanned candidates.

    Batches from longer windows come first; inside a batch the original
    order is kept. The first occurrence of each value wins. The original
    input is appended as a last-resort candidate if nothing produced it.

    Args:
        batches: Candidate batches in ascending window length.
        original_input: The scanned text.

    Returns:
        Ranked candidates.
    """
    ranked = unique(
        candidate
        for batch in reversed(batches)
        for candidate in batch
    )
    if original_input and original_input not in ranked:
        logger.debug(f"add input text {original_input} as fallback")
        ranked.append(original_input)
    return ranked


def scan(store: RuleStore, text: str) -> List[str]:
    """
    Get ranked dictionary-form candidates for a text fragment.

    Returns an empty list for empty text. Otherwise the result is never
    empty and always contains the text itself.
    """
    if not text:
        return []
    return rank(scan_windows(store, text), text)


class Scanner:
    """Scans text against a fixed RuleStore."""

    def __init__(self, store: RuleStore):
        self.store = store

    def scan(self, text: str) -> List[str]:
        return scan(self.store, text)

    def best(self, text: str):
        """The most relevant candidate, or None for empty text."""
        candidates = self.scan(text)
        return candidates[0] if candidates else None
