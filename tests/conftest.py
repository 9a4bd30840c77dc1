"""
Shared fixtures for jishokei tests.
"""

import json

import pytest

from jishokei.rules import RuleStore


CONJUGATION_RULES = {
    "っ": ["う", "つ", "る"],
    "ん": ["ぬ", "ぶ", "む"],
    "べ": ["ぶ"],
    "き": ["く"],
    "し": ["す"],
    "り": ["る"],
    "く": ["い"],
}

ORTHOGRAPHY_INDEX = {
    "見る": ["見る", "みる"],
    "食べる": ["食べる", "たべる"],
    "たべる": ["食べる", "たべる"],
    "読む": ["読む", "よむ"],
    "買う": ["買う", "かう"],
    "取る": ["取る", "とる"],
    "取り出す": ["取り出す", "とりだす"],
    "書く": ["書く", "かく"],
    "高い": ["高い", "たかい"],
}

SPECIAL_RULES = {
    "行った": ["行く"],
    "来た": ["来る"],
}


@pytest.fixture
def sample_store():
    """A small but realistic RuleStore."""
    return RuleStore(
        conjugation_rules=CONJUGATION_RULES,
        orthography_index=ORTHOGRAPHY_INDEX,
        special_rules=SPECIAL_RULES,
    )


@pytest.fixture
def empty_store():
    return RuleStore.empty()


@pytest.fixture
def write_json(tmp_path):
    """Write an object as a UTF-8 JSON file under tmp_path and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def rules_dir(tmp_path, write_json):
    """A rules directory holding the three sample tables."""
    write_json("index.json", ORTHOGRAPHY_INDEX)
    write_json("conjugate_rule.json", CONJUGATION_RULES)
    write_json("special_rule.json", SPECIAL_RULES)
    return tmp_path
