"""
Tests for scan.py - window scanning and ranking.
"""

import pytest

from jishokei.rules import RuleStore
from jishokei.scan import Scanner, iter_windows, rank, scan, scan_windows


class TestIterWindows:

    def test_prefixes_shortest_first(self):
        assert list(iter_windows("食べた")) == ["食", "食べ", "食べた"]

    def test_empty(self):
        assert list(iter_windows("")) == []


class TestScanWindows:

    def test_one_batch_per_window(self, sample_store):
        batches = scan_windows(sample_store, "食べた")
        assert batches == [[], ["食べる", "たべる"], []]

    def test_special_rule_before_reconstruction(self):
        store = RuleStore(
            special_rules={"見": ["見える"]},
            orthography_index={"見る": ["見る", "みる"]},
        )
        assert scan_windows(store, "見") == [["見える", "見る", "みる"]]

    def test_empty_input(self, sample_store):
        assert scan_windows(sample_store, "") == []


class TestRank:

    def test_longer_windows_first(self):
        batches = [["a"], ["b", "c"], ["d"]]
        assert rank(batches, "x") == ["d", "b", "c", "a", "x"]

    def test_first_occurrence_wins(self):
        batches = [["a", "b"], ["b"], ["c", "a"]]
        assert rank(batches, "x") == ["c", "a", "b", "x"]

    def test_original_input_not_repeated(self):
        assert rank([["x"], ["y"]], "x") == ["y", "x"]

    def test_no_candidates(self):
        assert rank([[], []], "食べた") == ["食べた"]


class TestScan:

    def test_empty_input(self, sample_store):
        assert scan(sample_store, "") == []

    def test_round_trip_identity_rule(self):
        store = RuleStore(
            conjugation_rules={"る": ["る"]},
            orthography_index={"見る": ["見る", "みる"]},
        )
        assert scan(store, "見る") == ["見る", "みる"]

    def test_special_rule_precedes_fallback(self):
        store = RuleStore(special_rules={"行った": ["行く"]})
        result = scan(store, "行った")
        assert result == ["行く", "行った"]
        assert result.index("行く") < result.index("行った")

    def test_empty_tables(self, empty_store):
        """With nothing loaded only the input comes back."""
        assert scan(empty_store, "食べる") == ["食べる"]

    def test_ichidan_past(self, sample_store):
        assert scan(sample_store, "食べた") == ["食べる", "たべる", "食べた"]

    def test_godan_te_form_with_trailing_text(self, sample_store):
        assert scan(sample_store, "読んでいる") == ["読む", "よむ", "読んでいる"]

    def test_compound_verb_outranks_prefix(self, sample_store):
        """取り出した resolves 取る at length 2 and 取り出す at length 3."""
        result = scan(sample_store, "取り出した")
        assert result.index("取り出す") < result.index("取る")
        assert result[-1] == "取り出した"

    def test_longer_window_priority(self):
        store = RuleStore(special_rules={"あ": ["short"], "あい": ["long"]})
        assert scan(store, "あい") == ["long", "short", "あい"]

    def test_candidate_equal_to_input_keeps_rank(self):
        """If a rule already produced the input it is not moved to the end."""
        store = RuleStore(orthography_index={"見る": ["見る", "みる"]})
        result = scan(store, "見る")
        assert result == ["見る", "みる"]

    @pytest.mark.parametrize("text", [
        "食べた", "行った", "読んでいる", "取り出した", "買って", "高く", "x", "𠮟られた", "みる",
    ])
    def test_contains_input_without_duplicates(self, sample_store, empty_store, text):
        for store in (sample_store, empty_store):
            result = scan(store, text)
            assert result
            assert text in result
            assert len(result) == len(set(result))

    def test_multibyte_input(self, sample_store):
        result = scan(sample_store, "𠮟って")
        assert result[-1] == "𠮟って"
        for candidate in result:
            assert "�" not in candidate


class TestScanner:

    def test_scan(self, sample_store):
        scanner = Scanner(sample_store)
        assert scanner.scan("買って") == ["買う", "かう", "買って"]

    def test_best(self, sample_store):
        scanner = Scanner(sample_store)
        assert scanner.best("高く") == "高い"
        assert scanner.best("") is None

    def test_store_not_mutated(self, sample_store):
        before = dict(sample_store.orthography_index)
        Scanner(sample_store).scan("取り出した")
        assert dict(sample_store.orthography_index) == before
