"""Tests for tournament.py: season buckets and the rescrape loop."""

import json
from unittest.mock import MagicMock, patch

import pytest
from fakes import match

from league_scraper.exceptions import ReconnectionTimeoutError
from league_scraper.models import ScrapeOutcome, SeasonLink
from league_scraper.tournament import rescrape_season, scrape_tournament

BASE_URL = "https://globalsportsarchive.com"
STANDING = [{"rank": 1, "team": "Alpha", "matchPlayed": 2}]


def link(label):
    year = label.split("/")[0]
    return SeasonLink(label, f"{BASE_URL}/competition/soccer/league/{year}/", STANDING)


def gameweeks(home):
    return [{"gameweek": 1, "matches": [match(home, "Beta")]}]


def ok(home):
    return ScrapeOutcome(False, gameweeks(home))


def failed(home="Partial"):
    return ScrapeOutcome(True, gameweeks(home))


@pytest.fixture
def crawl(tmp_path):
    """Run scrape_tournament with season discovery and crawling replaced."""

    def run(links, outcomes, **kwargs):
        with patch("league_scraper.tournament.scrape_season_links", return_value=links), \
                patch("league_scraper.tournament.scrape_gameweeks", side_effect=outcomes) as scrape:
            result = scrape_tournament(
                MagicMock(), "Premier League", BASE_URL, f"{BASE_URL}/league/", str(tmp_path),
                **kwargs,
            )
        return result, scrape, tmp_path / "Premier_League"

    return run


def read_artifact(path):
    return json.loads(path.read_text())


class TestScrapeTournament:

    def test_seasons_land_in_composed_repaired_and_erroneous(self, crawl):
        outcomes = [
            ok("A"),
            failed(), ok("B"),
            failed(), failed(), failed(), failed(),
        ]

        result, scrape, out = crawl([link("2021/2022"), link("2022/2023"), link("2023/2024")], outcomes)

        assert [s["season"] for s in result.composed] == ["2021/2022"]
        assert [s["season"] for s in result.repaired] == ["2022/2023"]
        assert [s["season"] for s in result.erroneous] == ["2023/2024"]
        assert scrape.call_count == 7

        composed = read_artifact(out / "composed.json")
        assert composed["tournament"] == "Premier League"
        assert composed["data"][0] == {
            "season": "2021/2022",
            "gameweeks": gameweeks("A"),
            "leagueStanding": STANDING,
        }
        assert read_artifact(out / "repaired.json")["data"][0]["gameweeks"] == gameweeks("B")
        assert read_artifact(out / "erroneous.json")["data"][0]["gameweeks"] == gameweeks("Partial")

    def test_clean_tournament_writes_only_composed(self, crawl):
        result, _, out = crawl([link("2021/2022"), link("2022/2023")], [ok("A"), ok("B")])

        assert len(result.composed) == 2
        assert (out / "composed.json").exists()
        assert (out / "composed_matches.csv").exists()
        assert (out / "composed_standings.csv").exists()
        assert not (out / "repaired.json").exists()
        assert not (out / "erroneous.json").exists()

    def test_no_clean_season_writes_no_composed_artifact(self, crawl):
        result, _, out = crawl([link("2021/2022")], [failed(), ok("B")])

        assert result.composed == []
        assert not (out / "composed.json").exists()
        assert not (out / "composed_matches.csv").exists()
        assert (out / "repaired.json").exists()

    def test_rescrape_count_is_configurable(self, crawl):
        _, scrape, _ = crawl([link("2021/2022")], [failed()] * 3, max_rescrape_count=2)
        assert scrape.call_count == 3

    def test_reconnection_timeout_marks_season_erroneous_and_moves_on(self, crawl):
        outcomes = [ReconnectionTimeoutError(601, 600), ok("B")]

        result, scrape, _ = crawl([link("2021/2022"), link("2022/2023")], outcomes)

        assert result.erroneous == [{"season": "2021/2022", "gameweeks": [], "leagueStanding": STANDING}]
        assert [s["season"] for s in result.composed] == ["2022/2023"]
        assert scrape.call_count == 2

    def test_unexpected_error_marks_season_erroneous_and_moves_on(self, crawl):
        outcomes = [ConnectionResetError("[Errno 104] Connection reset by peer"), ok("B")]

        result, scrape, _ = crawl([link("2021/2022"), link("2022/2023")], outcomes)

        assert [s["season"] for s in result.erroneous] == ["2021/2022"]
        assert result.erroneous[0]["gameweeks"] == []
        assert [s["season"] for s in result.composed] == ["2022/2023"]
        assert scrape.call_count == 2

    def test_delay_between_seasons_is_jittered(self, crawl, monkeypatch):
        pauses = []
        monkeypatch.setattr("league_scraper.tournament.time.sleep", pauses.append)

        crawl([link("2021/2022"), link("2022/2023"), link("2023/2024")], [ok("A"), ok("B"), ok("C")],
              delay=5, delay_jitter=2)

        assert len(pauses) == 2
        assert all(5 <= p <= 7 for p in pauses)

    def test_non_league_tournament_is_skipped(self, crawl):
        result, scrape, out = crawl(None, [])

        assert result is None
        scrape.assert_not_called()
        assert not (out / "composed.json").exists()

    def test_seasons_are_crawled_into_their_own_directory(self, crawl):
        _, scrape, out = crawl([link("2021/2022")], [ok("A")], expected_matches=10)

        args, kwargs = scrape.call_args
        assert args[2] == link("2021/2022").url
        assert args[3] == str(out / "2021_2022")
        assert kwargs["expected_matches"] == 10


class TestRescrapeSeason:

    def test_writes_into_retries_with_unique_ids(self, tmp_path):
        with patch("league_scraper.tournament.scrape_gameweeks", side_effect=[failed(), ok("B")]) as scrape:
            attempt, outcome = rescrape_season(MagicMock(), BASE_URL, f"{BASE_URL}/s/1/", str(tmp_path), 3)

        assert attempt == 2
        assert outcome == ok("B")
        output_dirs = {call.args[3] for call in scrape.call_args_list}
        assert output_dirs == {str(tmp_path / "retries")}
        for call in scrape.call_args_list:
            assert call.kwargs["unique_file_id"].isdigit()

    def test_returns_last_outcome_when_every_attempt_errs(self, tmp_path):
        with patch("league_scraper.tournament.scrape_gameweeks", side_effect=[failed("X"), failed("Y")]):
            attempt, outcome = rescrape_season(MagicMock(), BASE_URL, f"{BASE_URL}/s/1/", str(tmp_path), 2)

        assert attempt is None
        assert outcome == failed("Y")
