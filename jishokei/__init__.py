"""
jishokei: dictionary-form reconstruction for Japanese text fragments.

Given the text around a cursor, returns plausible dictionary forms of the
word it starts with, most relevant first.

Example:
    >>> import jishokei
    >>> store = jishokei.load_default_rule_store()
    >>> jishokei.scan(store, "読んで")[0]
    '読む'
"""

from jishokei.rules import (
    RuleLoadError,
    RuleStore,
    load_default_rule_store,
    load_rule_store,
)
from jishokei.scan import Scanner, rank, scan, scan_windows

__version__ = "0.1.0"

__all__ = [
    "RuleLoadError",
    "RuleStore",
    "Scanner",
    "load_default_rule_store",
    "load_rule_store",
    "rank",
    "scan",
    "scan_windows",
    "__version__",
]
