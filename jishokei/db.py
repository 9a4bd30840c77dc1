"""
SQLite storage for rule tables.

The JSON rule files are the editable source; a rule database is a
compact, single-file copy of all three tables that a host can ship or load
instead. Rows keep the position of each value so table order survives a
round trip.
"""

import logging
import os
from collections import defaultdict
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional, Union

from sqlalchemy import Column, Integer, String, UniqueConstraint, create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base

from jishokei import settings
from jishokei.rules import TABLE_NAMES, CONJUGATION, ORTHOGRAPHY, SPECIAL, RuleLoadError, RuleStore

logger = logging.getLogger(__name__)

Base = declarative_base()


class RuleRow(Base):
    """
    One value of one rule.

    A rule registered with no values is stored as a single row with a
    NULL value, so it still resolves (to an empty tuple) after loading.
    """
    __tablename__ = 'rule_entry'

    id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String, nullable=False, index=True)
    key = Column(String, nullable=False)
    ord = Column(Integer, nullable=False)
    value = Column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint('table_name', 'key', 'ord'),
    )

    def __repr__(self):
        return f"<RuleRow {self.table_name}:{self.key}[{self.ord}]={self.value!r}>"


def get_engine(db_path: Optional[Union[str, os.PathLike]] = None):
    """Create an engine for a rule database (defaults to settings.DB_PATH)."""
    if db_path is None:
        db_path = settings.DB_PATH
    return create_engine(f"sqlite:///{Path(db_path)}")


@contextmanager
def session_scope(db_path: Optional[Union[str, os.PathLike]] = None):
    """
    Provide a transactional session for a rule database.

    Commits on success, rolls back on error.
    """
    engine = get_engine(db_path)
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


def save_rule_store(store: RuleStore, db_path: Optional[Union[str, os.PathLike]] = None) -> int:
    """
    Write all three tables of a store into a rule database.

    Existing rules in the database are replaced.

    Returns:
        Number of rows written.
    """
    if db_path is not None:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    rows = []
    for table_name in TABLE_NAMES:
        for key, values in store.table(table_name).items():
            if not values:
                rows.append(RuleRow(table_name=table_name, key=key, ord=0, value=None))
                continue
            for i, value in enumerate(values):
                rows.append(RuleRow(table_name=table_name, key=key, ord=i, value=value))

    with session_scope(db_path) as session:
        Base.metadata.create_all(session.get_bind())
        session.execute(delete(RuleRow))
        session.add_all(rows)

    logger.info(f"Saved {len(rows)} rule rows to {db_path or settings.DB_PATH}")
    return len(rows)


def load_rule_store_from_db(db_path: Optional[Union[str, os.PathLike]] = None,
                            strict: bool = False) -> RuleStore:
    """
    Build a RuleStore from a rule database.

    A missing database gives an empty store with a warning. A database that
    cannot be read gives an empty store with a warning, or raises
    RuleLoadError when ``strict`` is set.
    """
    path = Path(db_path) if db_path is not None else settings.DB_PATH

    if not path.exists():
        message = f"Rule database not found: {path}"
        logger.warning(message)
        return RuleStore(warnings=(message,))

    tables: Dict[str, Dict[str, List[str]]] = {name: defaultdict(list) for name in TABLE_NAMES}
    try:
        with session_scope(path) as session:
            result = session.execute(
                select(RuleRow.table_name, RuleRow.key, RuleRow.value)
                .order_by(RuleRow.table_name, RuleRow.key, RuleRow.ord)
            )
            for table_name, key, value in result:
                if table_name not in tables:
                    logger.warning(f"Ignoring rows of unknown rule table {table_name!r}")
                    continue
                values = tables[table_name][key]
                if value is not None:
                    values.append(value)
    except SQLAlchemyError as e:
        error = RuleLoadError("database", path, str(e))
        if strict:
            raise error from e
        logger.error(f"Can't read rule database, using empty tables: {error}")
        return RuleStore(warnings=(str(error),))

    logger.info(
        f"Loaded {len(tables[ORTHOGRAPHY])} orthography, {len(tables[CONJUGATION])} conjugation "
        f"and {len(tables[SPECIAL])} special rules from {path}"
    )
    return RuleStore(
        conjugation_rules=tables[CONJUGATION],
        orthography_index=tables[ORTHOGRAPHY],
        special_rules=tables[SPECIAL],
    )
