# league_scraper/standings.py
"""
League table for one already-loaded season page.

A season counts as played when at least one score cell shows something other
than the ':' placeholder. Empty and all-zero tables both come back as [].
"""

import logging
import os

from league_scraper.cleaning import parse_int
from league_scraper.config import (
    SEASON_PAGE_TIMEOUT,
    SELECTOR_SCORE,
    SELECTOR_STANDING_RANK,
    SELECTOR_STANDING_ROW,
    SELECTOR_STANDING_TEAM,
    SELECTOR_STANDINGS_CONTAINER,
    STANDING_COLUMNS,
    STANDINGS_ISSUES_LOG,
    UNPLAYED_SCORE,
)
from league_scraper.exceptions import ReconnectionTimeoutError
from league_scraper.issues import IssueLog
from league_scraper.retry import with_retry
from league_scraper.storage import make_dirs, season_id_from_url, write_json
from league_scraper.waits import count_stabilized

logger = logging.getLogger(__name__)


def has_results(soup):
    return any(
        el.get_text(strip=True) != UNPLAYED_SCORE
        for el in soup.select(SELECTOR_SCORE)
    )


def standing_row_ready(row):
    return row.select_one(SELECTOR_STANDING_TEAM) is not None


def parse_standings(soup):
    standings = []
    for row in soup.select(SELECTOR_STANDING_ROW):
        rank_tag = row.select_one(SELECTOR_STANDING_RANK)
        team_tag = row.select_one(SELECTOR_STANDING_TEAM)
        rank = rank_tag.get_text(strip=True) if rank_tag else ""
        team = team_tag.get_text(strip=True) if team_tag else ""
        if not (team and rank):
            continue

        record = {"rank": parse_int(rank), "team": team}
        for i, column in enumerate(STANDING_COLUMNS, start=1):
            cell = row.select_one(f".col_p{i}")
            record[column] = parse_int(cell.get_text(strip=True) if cell else None)
        standings.append(record)
    return standings


def is_degenerate(standings):
    """Placeholder tables list every team with zero matches played."""
    return not any(row["matchPlayed"] for row in standings)


def scrape_league_standing(session, season_url, output_dir, timeout=SEASON_PAGE_TIMEOUT):
    """
    Read the league table of the season page currently loaded in `session`.

    Returns the list of standing rows, or [] when the season has no played
    match, the table could not be parsed, or every team has 0 matches played.
    Accepted tables are saved to standing_<seasonId>.json in `output_dir`.
    """
    make_dirs(output_dir)
    issues = IssueLog(os.path.join(output_dir, STANDINGS_ISSUES_LOG))
    logger.info("Scraping league standing...")

    if not session.extract(has_results):
        issues.warning(
            "No match results found for this season (e.g., only fixtures available). "
            "Skipping standings scrape.",
            season_url,
        )
        return []

    try:
        def wait_for_table():
            session.wait_for_selector(SELECTOR_STANDING_ROW, timeout)
            session.wait_for(
                count_stabilized(SELECTOR_STANDING_ROW, standing_row_ready),
                timeout,
                f"Standings table did not stabilize within {timeout}s (timeout)",
            )

        with_retry(wait_for_table)
        standings = session.extract(parse_standings)
    except ReconnectionTimeoutError:
        raise
    except Exception as e:
        issues.error(
            f"Error scraping standings: {e}",
            season_url,
            html_snapshot=session.snapshot(SELECTOR_STANDINGS_CONTAINER),
        )
        return []

    if not standings:
        issues.error(
            "No standings data extracted. Possible issue with table structure or loading.",
            season_url,
            html_snapshot=session.snapshot(SELECTOR_STANDINGS_CONTAINER),
        )
        return []

    if is_degenerate(standings):
        logger.warning("⚠️ Standings for %s have no matches played. Discarding.", season_url)
        return []

    output_file = os.path.join(output_dir, f"standing_{season_id_from_url(season_url)}.json")
    write_json(output_file, standings)
    logger.info("✅ Saved standings for %d teams → %s", len(standings), output_file)
    return standings
