"""
Rule tables for dictionary-form reconstruction.

Three static lookup tables drive the engine:
- conjugation rules: last character of an inflected form -> candidate
  dictionary-form endings that may replace it (e.g. "っ" -> ["う", "つ", "る"])
- orthography index: restored dictionary form -> registered spelling
  variants (e.g. "みる" -> ["見る", "観る", "みる"])
- special rules: exact literal substring -> fixed override outputs for
  irregular or idiomatic cases (e.g. "行った" -> ["行く"])

Tables are loaded once from JSON objects of ``str -> list[str]`` and are
read-only afterwards. A missing or malformed table degrades to an empty one
instead of failing; what went wrong is recorded on ``RuleStore.warnings``.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from jishokei import settings

logger = logging.getLogger(__name__)


# Table names used in log messages, warnings and the rule database
ORTHOGRAPHY = "orthography"
CONJUGATION = "conjugation"
SPECIAL = "special"

TABLE_NAMES = (ORTHOGRAPHY, CONJUGATION, SPECIAL)

RuleTable = Mapping[str, Tuple[str, ...]]
RuleSource = Union[None, str, os.PathLike, Mapping[str, Any]]


class RuleLoadError(ValueError):
    """A rule table source exists but could not be read or parsed."""

    def __init__(self, table: str, source: Any, reason: str):
        self.table = table
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load {table} rules from {source}: {reason}")


def _freeze_table(table: Optional[Mapping[str, Sequence[str]]]) -> RuleTable:
    if table is None:
        return MappingProxyType({})
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


@dataclass(frozen=True)
class RuleStore:
    """
    Immutable holder of the three rule tables.

    Plain dicts of lists may be passed in; they are copied into read-only
    mappings of tuples, so the store can be shared between threads and
    scans without coordination.
    """
    conjugation_rules: RuleTable = field(default_factory=dict)
    orthography_index: RuleTable = field(default_factory=dict)
    special_rules: RuleTable = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'conjugation_rules', _freeze_table(self.conjugation_rules))
        object.__setattr__(self, 'orthography_index', _freeze_table(self.orthography_index))
        object.__setattr__(self, 'special_rules', _freeze_table(self.special_rules))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    @classmethod
    def empty(cls) -> "RuleStore":
        return cls()

    @property
    def degraded(self) -> bool:
        """True if any table failed to load cleanly."""
        return bool(self.warnings)

    def table(self, name: str) -> RuleTable:
        """Get a table by name (orthography, conjugation or special)."""
        if name == ORTHOGRAPHY:
            return self.orthography_index
        if name == CONJUGATION:
            return self.conjugation_rules
        if name == SPECIAL:
            return self.special_rules
        raise ValueError(f"Unknown rule table: {name}")


# ============================================================================
# Loading
# ============================================================================

def _coerce_table(raw: Any, table: str, source: Any,
                  warnings: List[str]) -> Dict[str, Tuple[str, ...]]:
    """Validate a parsed ``str -> list[str]`` object, dropping bad entries."""
    if not isinstance(raw, Mapping):
        message = (f"Invalid {table} rule structure in {source}: "
                   f"expected an object, got {type(raw).__name__}")
        logger.error(message)
        warnings.append(message)
        return {}

    result: Dict[str, Tuple[str, ...]] = {}
    for key, values in raw.items():
        if not isinstance(key, str) or not isinstance(values, (list, tuple)):
            message = f"Skipping malformed {table} rule {key!r} in {source}"
            logger.warning(message)
            warnings.append(message)
            continue

        kept = tuple(v for v in values if isinstance(v, str))
        if len(kept) != len(values):
            message = f"Dropped non-string values from {table} rule {key!r} in {source}"
            logger.warning(message)
            warnings.append(message)
        result[key] = kept

    return result


def load_table(source: RuleSource,
               table: str = ORTHOGRAPHY) -> Tuple[Dict[str, Tuple[str, ...]], List[str]]:
    """
    Load one rule table.

    Args:
        source: None (table absent), an already parsed mapping, or a path
            to a JSON file holding an object of ``str -> list[str]``.
        table: Table name, used in messages.

    Returns:
        Tuple of (table, warnings). A missing source or a source with the
        wrong structure yields an empty table plus a warning.

    Raises:
        RuleLoadError: If the file exists but cannot be read or parsed.
    """
    warnings: List[str] = []

    if source is None:
        message = f"No {table} rule source given, using an empty table"
        logger.warning(message)
        warnings.append(message)
        return {}, warnings

    if isinstance(source, Mapping):
        return _coerce_table(source, table, "<mapping>", warnings), warnings

    path = Path(source)
    if not path.exists():
        message = f"{table.capitalize()} rule file not found: {path}"
        logger.warning(message)
        warnings.append(message)
        return {}, warnings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise RuleLoadError(table, path, str(e)) from e

    loaded = _coerce_table(raw, table, path, warnings)
    logger.info(f"Loaded {len(loaded)} {table} rules from {path}")
    return loaded, warnings


def load_rule_store(orthography_source: RuleSource = None,
                    conjugation_source: RuleSource = None,
                    special_rules_source: RuleSource = None,
                    strict: bool = False) -> RuleStore:
    """
    Build a RuleStore from three sources.

    Each table loads independently; a table that fails to load is replaced
    by an empty one and the failure is recorded on ``RuleStore.warnings``.

    Args:
        orthography_source: Source of the orthography index.
        conjugation_source: Source of the conjugation rules.
        special_rules_source: Source of the special rules.
        strict: Re-raise RuleLoadError instead of degrading.

    Returns:
        The loaded RuleStore.
    """
    sources = {
        ORTHOGRAPHY: orthography_source,
        CONJUGATION: conjugation_source,
        SPECIAL: special_rules_source,
    }
    tables: Dict[str, Dict[str, Tuple[str, ...]]] = {}
    warnings: List[str] = []

    for name, source in sources.items():
        try:
            tables[name], table_warnings = load_table(source, name)
        except RuleLoadError as e:
            if strict:
                raise
            logger.error(f"Can't read {name} rules, using an empty table: {e}")
            tables[name], table_warnings = {}, [str(e)]
        warnings.extend(table_warnings)

    return RuleStore(
        conjugation_rules=tables[CONJUGATION],
        orthography_index=tables[ORTHOGRAPHY],
        special_rules=tables[SPECIAL],
        warnings=tuple(warnings),
    )


def load_default_rule_store(rules_dir: Optional[Union[str, os.PathLike]] = None,
                            strict: bool = False) -> RuleStore:
    """
    Load the three JSON rule files from a rules directory.

    Without ``rules_dir`` the paths come from jishokei.settings (the
    bundled data directory unless overridden by environment variables).
    """
    if rules_dir is None:
        index_path = settings.INDEX_PATH
        conjugate_path = settings.CONJUGATE_RULE_PATH
        special_path = settings.SPECIAL_RULE_PATH
    else:
        rules_dir = Path(rules_dir)
        index_path = rules_dir / settings.INDEX_FILE_NAME
        conjugate_path = rules_dir / settings.CONJUGATE_RULE_FILE_NAME
        special_path = rules_dir / settings.SPECIAL_RULE_FILE_NAME

    return load_rule_store(index_path, conjugate_path, special_path, strict=strict)
