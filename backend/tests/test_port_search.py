"""Tests for port directory loading and fuzzy search."""

import json

import pytest

from lcl_quote.ports.directory import Port, load_port_directory
from lcl_quote.ports.search import MAX_RESULTS, score_field, search


@pytest.fixture(scope="module")
def directory():
    return load_port_directory()


class TestScoreField:
    def test_exact(self):
        assert score_field("dublin", "Dublin") == 100

    def test_prefix(self):
        assert score_field("dub", "Dublin") == 90

    def test_substring(self):
        assert score_field("dub", "IEDUB") == 80

    def test_complete_subsequence(self):
        # d-u-b appear in order in "durban": 3 chars * 10 + 20 bonus
        assert score_field("dub", "Durban") == 50

    def test_partial_subsequence(self):
        # only "d" and "u" are found in order
        assert score_field("dux", "Durban") == 20

    def test_no_match(self):
        assert score_field("xyz", "Durban") == 0


class TestSearch:
    def test_dub_ranking(self, directory):
        codes = [p.code for p in search("dub", directory)]
        # Two prefix matches in directory order, then the substring match
        assert codes[:3] == ["AEDXB", "IEDUB", "AEJEA"]
        assert "ZADUR" in codes

    def test_code_lookup_is_case_insensitive(self, directory):
        results = search("cnsha", directory)
        assert results[0].code == "CNSHA"

    def test_country_match(self, directory):
        results = search("china", directory)
        assert results
        assert all(p.country == "China" for p in results[:5])

    def test_empty_query_returns_nothing(self, directory):
        assert search("", directory) == []
        assert search("   ", directory) == []

    def test_results_capped_at_ten(self, directory):
        assert len(search("a", directory)) == MAX_RESULTS

    def test_limit_cannot_exceed_cap(self, directory):
        assert len(search("a", directory, limit=50)) == MAX_RESULTS

    def test_weak_matches_are_dropped(self):
        ports = [Port("Aarhus", "Denmark", "DKAAR")]
        # one stray letter in order scores 10, which is discarded
        assert search("zq", ports) == []
        assert search("hz", ports) == []


class TestLoadPortDirectory:
    def test_bundled_directory_loads(self, directory):
        assert len(directory) > 50
        assert Port("Jebel Ali (Dubai)", "United Arab Emirates", "AEJEA") in directory

    def test_custom_directory(self, tmp_path):
        path = tmp_path / "ports.json"
        path.write_text(json.dumps([{"name": "Mombasa", "country": "Kenya", "code": "KEMBA"}]))
        assert load_port_directory(path) == (Port("Mombasa", "Kenya", "KEMBA"),)

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "ports.json"
        path.write_text(json.dumps({"ports": []}))
        with pytest.raises(ValueError):
            load_port_directory(path)
