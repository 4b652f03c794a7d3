"""Tests for verification.py: cross-gameweek anomaly checks."""

import json

import pytest
from fakes import match

from league_scraper.exceptions import DataIntegrityError
from league_scraper.verification import find_duplicate_matches, verify_gameweek_data

SEASON_URL = "https://globalsportsarchive.com/competition/soccer/league-2022-2023/12345/"


def read_log(path):
    return [json.loads(chunk) for chunk in path.read_text().split("\n\n") if chunk.strip()]


class TestVerifyGameweekData:

    def test_raises_on_duplicate_match_tuple(self, tmp_path):
        repeated = match("Alpha", "Beta", date="2022-08-01", score="1:0")
        gameweeks = [
            {"gameweek": 1, "matches": [repeated]},
            {"gameweek": 2, "matches": [dict(repeated, statsUrl="https://elsewhere/")]},
        ]

        with pytest.raises(DataIntegrityError) as exc_info:
            verify_gameweek_data(gameweeks, 1, SEASON_URL, tmp_path)

        assert len(exc_info.value.duplicates) == 1
        assert exc_info.value.duplicates[0]["gameweek"] == 2
        entries = read_log(tmp_path / "gameweek_verification_issues.log")
        assert entries[0]["type"] == "error"
        assert entries[0]["seasonUrl"] == SEASON_URL

    def test_does_not_raise_without_duplicates(self, tmp_path):
        gameweeks = [
            {"gameweek": 1, "matches": [match("Alpha", "Beta", date="2022-08-01")]},
            {"gameweek": 2, "matches": [match("Beta", "Alpha", date="2022-08-08")]},
        ]

        data, report = verify_gameweek_data(gameweeks, 1, SEASON_URL, tmp_path)

        assert data is gameweeks
        assert report == []

    def test_same_fixture_with_different_score_is_not_a_duplicate(self):
        gameweeks = [
            {"gameweek": 1, "matches": [match("A", "B", date="2022-08-01", score="1:0")]},
            {"gameweek": 2, "matches": [match("A", "B", date="2022-08-01", score="2:0")]},
        ]

        assert find_duplicate_matches(gameweeks) == []

    def test_reports_sparse_bad_date_and_empty_gameweeks(self, tmp_path):
        gameweeks = [
            {"gameweek": 1, "matches": [match(f"H{i}", f"A{i}") for i in range(10)]},
            {"gameweek": 2, "matches": [match("X", "Y", date="2022-08-08")]},
            {"gameweek": 3, "matches": [match("P", "Q", date="Sat 13 Aug")] * 1},
            {"gameweek": 4, "matches": []},
        ]

        data, report = verify_gameweek_data(gameweeks, 10, SEASON_URL, tmp_path)

        assert data == gameweeks
        assert all(entry["type"] == "warning" for entry in report)
        messages = [entry["message"] for entry in report]
        assert "Gameweek 2 has fewer matches than expected: 1 found, expected ~10" in messages
        assert "Gameweek 3 contains matches with invalid or missing dates" in messages
        assert "Gameweek 4 is empty (no matches)" in messages
        # empty gameweeks are reported as empty, not as sparse
        assert not any(m.startswith("Gameweek 4 has fewer") for m in messages)
        assert len(read_log(tmp_path / "gameweek_verification_issues.log")) == len(report)
