# league_scraper/gameweeks.py
"""
Gameweek-by-gameweek crawl of one season.

Each gameweek is navigated to, waited on until its rows stop changing, and
parsed. A gameweek is only accepted when none of its matches repeats a
signature already accepted this season and it is not suspiciously sparse;
otherwise it is retried a bounded number of times and then skipped. The
accepted gameweeks are verified, put in chronological order and saved.
"""

import logging
import math
import os
import random
import time
from dataclasses import dataclass

from league_scraper.cleaning import absolute_url, match_signature, normalize_match_date
from league_scraper.config import (
    AWARDED_MARKER,
    DATE_HEADING_STYLE,
    GAMEWEEK_DELAY,
    GAMEWEEK_DELAY_JITTER,
    GAMEWEEK_ISSUES_LOG,
    MAX_GAMEWEEK_RETRIES,
    PAGE_LOAD_TIMEOUT,
    SELECTOR_AWAY_TEAM,
    SELECTOR_HOME_TEAM,
    SELECTOR_MATCH_ROW,
    SELECTOR_MATCH_TIME,
    SELECTOR_MAX_WEEK,
    SELECTOR_ROW,
    SELECTOR_SCORE,
    SELECTOR_WEEK_CONTAINER,
    SPARSITY_RATIO,
    UNPLAYED_SCORE,
    WAIT_TIMEOUT,
)
from league_scraper.exceptions import ReconnectionTimeoutError, StructuralError
from league_scraper.issues import IssueLog
from league_scraper.models import ExtractionResult, ScrapeOutcome
from league_scraper.navigation import GameweekNavigator
from league_scraper.retry import with_retry
from league_scraper.sequencing import sort_gameweeks_by_date
from league_scraper.standings import has_results
from league_scraper.storage import make_dirs, season_id_from_url, write_json
from league_scraper.verification import verify_gameweek_data
from league_scraper.waits import count_stabilized

logger = logging.getLogger(__name__)


def expected_matches_per_gameweek(total_gameweeks):
    """Matches per round of a double round-robin with `total_gameweeks` rounds."""
    return (total_gameweeks + 2) // 2 // 2


def read_max_gameweeks(soup):
    max_week = soup.select_one(SELECTOR_MAX_WEEK)
    try:
        return int(max_week.get("value")) if max_week else 1
    except (TypeError, ValueError):
        return 1


def _text(row, selector):
    tag = row.select_one(selector)
    return tag.get_text(strip=True) if tag else ""


def match_row_ready(row):
    return bool(_text(row, SELECTOR_HOME_TEAM) and _text(row, SELECTOR_AWAY_TEAM))


def is_date_heading(element):
    style = (element.get("style") or "").replace(" ", "")
    return DATE_HEADING_STYLE in style


def parse_gameweek_matches(soup, base_url):
    """
    One match per row of the week container. A row takes its date from the
    closest date heading above it. A row without teams or stats link fails the
    whole extraction.
    """
    container = soup.select_one(SELECTOR_WEEK_CONTAINER)
    if container is None:
        return ExtractionResult.failure("Gameweek container not found")

    matches = []
    current_date = ""
    for element in container.find_all(recursive=False):
        if is_date_heading(element):
            current_date = normalize_match_date(element.get_text(strip=True))
            continue
        if element.name != "a":
            continue
        row = element.select_one(SELECTOR_ROW)
        if row is None:
            continue

        stats_url = element.get("href") or ""
        home_team = _text(row, SELECTOR_HOME_TEAM)
        away_team = _text(row, SELECTOR_AWAY_TEAM)
        if not (home_team and away_team and stats_url):
            return ExtractionResult.failure(
                f"Missing data in gameweek: homeTeam={home_team}, awayTeam={away_team}, statsUrl={stats_url}",
                rowIndex=len(matches),
            )

        score = _text(row, SELECTOR_SCORE) or UNPLAYED_SCORE
        match = {
            "date": current_date,
            "time": _text(row, SELECTOR_MATCH_TIME) or "TBD",
            "homeTeam": home_team,
            "awayTeam": away_team,
            "score": score,
            "statsUrl": absolute_url(stats_url, base_url),
        }
        if AWARDED_MARKER in score:
            match["awarded"] = True
        matches.append(match)

    return ExtractionResult.success(matches)


def find_duplicates(matches, accepted_signatures):
    """Matches whose signature is already accepted, or repeats within `matches`."""
    seen = set(accepted_signatures)
    duplicates = []
    for index, match in enumerate(matches):
        signature = match_signature(match)
        if signature in seen:
            duplicates.append({"index": index, "match": match})
        else:
            seen.add(signature)
    return duplicates


@dataclass
class GameweekAttempts:
    attempt: int = 0
    last_error: str | None = None


def wait_for_matches(session, timeout=WAIT_TIMEOUT):
    session.wait_for_selector(SELECTOR_MATCH_ROW, timeout)
    session.wait_for(
        count_stabilized(SELECTOR_MATCH_ROW, match_row_ready),
        timeout,
        f"Match rows did not stabilize within {timeout}s (timeout)",
    )


def scrape_gameweek(session, navigator, week, base_url, accepted_signatures, expected_matches,
                    issues, season_url, max_retries=MAX_GAMEWEEK_RETRIES, timeout=WAIT_TIMEOUT,
                    sparsity_ratio=SPARSITY_RATIO):
    """
    Navigate to `week` and extract it, retrying on failure or anomaly.
    Returns the accepted matches, or None once the retries are spent.
    """
    threshold = math.floor(expected_matches * sparsity_ratio)
    attempts = GameweekAttempts()

    while attempts.attempt < max_retries:
        attempts.attempt += 1
        try:
            navigator.go_to(week)
            with_retry(lambda: wait_for_matches(session, timeout))
            result = session.extract(lambda soup: parse_gameweek_matches(soup, base_url))
            if not result.ok:
                raise StructuralError(result.error, result.details)
        except ReconnectionTimeoutError:
            raise
        except Exception as e:
            attempts.last_error = str(e)
            issues.error(
                f"Failed to scrape gameweek {week}: {e}",
                season_url,
                gameweek=week,
                retryCount=attempts.attempt,
            )
            continue

        matches = result.matches
        duplicates = find_duplicates(matches, accepted_signatures)
        if duplicates:
            attempts.last_error = f"{len(duplicates)} duplicate matches"
            issues.warning(
                f"Found {len(duplicates)} duplicate matches in gameweek {week}",
                season_url,
                gameweek=week,
                duplicates=duplicates,
            )
            continue

        if len(matches) < threshold:
            attempts.last_error = f"{len(matches)} matches, expected ~{expected_matches}"
            issues.warning(
                f"Gameweek {week} has fewer matches than expected: "
                f"{len(matches)} found, expected ~{expected_matches}",
                season_url,
                gameweek=week,
                matches=matches,
            )
            continue

        return matches

    issues.error(
        f"Skipping gameweek {week} after {max_retries} failed attempts",
        season_url,
        gameweek=week,
        lastError=attempts.last_error,
    )
    return None


def scrape_gameweeks(session, base_url, season_url, output_dir, expected_matches=None,
                     unique_file_id=None, max_gameweek_retries=MAX_GAMEWEEK_RETRIES,
                     timeout=WAIT_TIMEOUT, page_timeout=PAGE_LOAD_TIMEOUT,
                     gameweek_delay=GAMEWEEK_DELAY, gameweek_delay_jitter=GAMEWEEK_DELAY_JITTER):
    """
    Crawl every gameweek of one season and return a ScrapeOutcome.

    The outcome's error flag is set when a gameweek had to be skipped or the
    season could not be crawled at all, whatever the error. Only
    ReconnectionTimeoutError escapes.
    """
    make_dirs(output_dir)
    suffix = f".{unique_file_id}" if unique_file_id else ""
    log_name = GAMEWEEK_ISSUES_LOG.replace(".log", f"{suffix}.log")
    issues = IssueLog(os.path.join(output_dir, log_name))

    gameweeks = []
    accepted_signatures = set()
    error_signal = False

    try:
        with_retry(lambda: session.navigate(season_url, page_timeout))

        if not session.extract(has_results):
            issues.warning(
                "No match results found for this season (e.g., only fixtures available). Skipping season.",
                season_url,
            )
            return ScrapeOutcome(False, [])

        max_gameweeks = session.extract(read_max_gameweeks)
        calculated = expected_matches_per_gameweek(max_gameweeks)
        expected = expected_matches or calculated
        logger.info("📋 Found %d gameweeks to scrape.", max_gameweeks)
        logger.info(
            "Expecting ~%d matches per gameweek%s.",
            expected,
            " (user-specified)" if expected_matches else " (calculated assuming double round-robin format)",
        )

        navigator = GameweekNavigator(session, timeout)
        navigator.go_to(1)

        for week in range(1, max_gameweeks + 1):
            logger.info("🔄 Scraping gameweek %d...", week)
            matches = scrape_gameweek(
                session, navigator, week, base_url, accepted_signatures, expected,
                issues, season_url, max_retries=max_gameweek_retries, timeout=timeout,
            )
            if matches is None:
                error_signal = True
                continue

            gameweeks.append({"gameweek": week, "matches": matches})
            accepted_signatures.update(match_signature(m) for m in matches)

            if week < max_gameweeks:
                time.sleep(gameweek_delay + random.uniform(0, gameweek_delay_jitter))

        verified, _report = verify_gameweek_data(gameweeks, expected, season_url, output_dir)
        sorted_gameweeks = sort_gameweeks_by_date(verified)

        output_file = os.path.join(output_dir, f"matches_{season_id_from_url(season_url)}{suffix}.json")
        write_json(output_file, sorted_gameweeks)
        logger.info("✅ Results saved to %s", output_file)

        return ScrapeOutcome(error_signal, sorted_gameweeks)

    except ReconnectionTimeoutError as e:
        issues.error(str(e), season_url)
        raise
    except Exception as e:
        issues.error(f"Error scraping season: {e}", season_url)
        return ScrapeOutcome(True, [])
