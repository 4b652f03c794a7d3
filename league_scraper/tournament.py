# league_scraper/tournament.py
"""
End-to-end crawl of one tournament.

Discovers the seasons, crawls each one, rescrapes seasons that came back with
the error flag, and sorts every season into composed / repaired / erroneous.
"""

import logging
import os
import random
import time

from league_scraper.config import (
    COMPOSED_CSV_FILE,
    COMPOSED_STANDINGS_CSV_FILE,
    COMPOSED_FILE,
    ERRONEOUS_FILE,
    MAX_RESCRAPE_COUNT,
    REPAIRED_FILE,
    RETRIES_DIRNAME,
    SEASON_DELAY,
    SEASON_DELAY_JITTER,
    SEASON_FIRST_YEAR,
    SEASON_LAST_YEAR,
)
from league_scraper.exceptions import ReconnectionTimeoutError
from league_scraper.export import export_matches_csv, export_standings_csv
from league_scraper.gameweeks import scrape_gameweeks
from league_scraper.models import TournamentResult, season_record
from league_scraper.seasons import scrape_season_links
from league_scraper.storage import make_dirs, normalize_filepath, write_json

logger = logging.getLogger(__name__)

ARTIFACTS = (
    ("composed", COMPOSED_FILE),
    ("repaired", REPAIRED_FILE),
    ("erroneous", ERRONEOUS_FILE),
)


def rescrape_season(session, base_url, season_url, output_dir, max_rescrape_count,
                    expected_matches=None):
    """
    Crawl the season again into `output_dir`/retries, up to `max_rescrape_count`
    times. Returns (attempt_number, outcome) of the first clean attempt, or
    (None, last_outcome) when every attempt erred.
    """
    retries_dir = os.path.join(output_dir, RETRIES_DIRNAME)
    outcome = None
    for attempt in range(1, max_rescrape_count + 1):
        logger.info("[%d/%d] Retrying season at %s...", attempt, max_rescrape_count, season_url)
        outcome = scrape_gameweeks(
            session, base_url, season_url, retries_dir,
            expected_matches=expected_matches,
            unique_file_id=str(time.time_ns() // 1_000_000),
        )
        if not outcome.has_error_occurred:
            word = "retries" if attempt > 1 else "retry"
            logger.info("✅ Error seemingly resolved after %d %s", attempt, word)
            return attempt, outcome
    return None, outcome


def save_buckets(result, data_dir):
    """Write each non-empty bucket as its own artifact; return the written paths."""
    written = {}
    for bucket, filename in ARTIFACTS:
        if getattr(result, bucket):
            path = os.path.join(data_dir, filename)
            write_json(path, result.artifact(bucket))
            written[bucket] = path
    return written


def log_summary(result, written):
    tournament = result.tournament
    if result.composed:
        logger.info("✅ %d seasons of %s saved to %s", len(result.composed), tournament, written["composed"])
    else:
        logger.warning("⚠️ No season of %s was scraped cleanly", tournament)

    if result.repaired:
        logger.info(
            "%d season(s) of %s were seemingly repaired after scraping error. Results saved to %s",
            len(result.repaired), tournament, written["repaired"],
        )

    if result.erroneous:
        logger.warning(
            "⚠️ %d season(s) of %s were erroneous. Results saved to %s",
            len(result.erroneous), tournament, written["erroneous"],
        )
    else:
        logger.info("There was no erroneous encounter from %s throughout scraping", tournament)


def scrape_tournament(session, tournament, base_url, page_url, data_dir,
                      delay=SEASON_DELAY, delay_jitter=SEASON_DELAY_JITTER, leagues_only=False,
                      max_rescrape_count=MAX_RESCRAPE_COUNT, expected_matches=None,
                      first_year=SEASON_FIRST_YEAR, last_year=SEASON_LAST_YEAR,
                      export_csv=True):
    """
    Crawl every discovered season of `tournament` into data_dir/<tournament>/.

    Returns a TournamentResult, or None when the tournament was skipped as a
    non-league competition.
    """
    data_dir = make_dirs(os.path.join(data_dir, normalize_filepath(tournament)))
    logger.info("🌐 Scraping %s...", tournament)

    season_links = scrape_season_links(
        session, base_url, page_url, data_dir,
        leagues_only=leagues_only, first_year=first_year, last_year=last_year,
    )
    if season_links is None:
        logger.info("Skipping %s: not a league competition", tournament)
        return None

    logger.info("Season links scraping for %s completed: %d season(s)", tournament, len(season_links))
    result = TournamentResult(tournament)

    for i, link in enumerate(season_links):
        output_dir = os.path.join(data_dir, normalize_filepath(link.season))
        logger.info("Processing %d of %d seasons [%s]", i + 1, len(season_links), link.season)

        try:
            outcome = scrape_gameweeks(
                session, base_url, link.url, output_dir, expected_matches=expected_matches,
            )
            if not outcome.has_error_occurred:
                result.composed.append(season_record(link.season, outcome.result, link.league_standing))
            else:
                logger.warning("⚠️ Encountered error on season %s", link.season)
                attempt, retried = rescrape_season(
                    session, base_url, link.url, output_dir, max_rescrape_count,
                    expected_matches=expected_matches,
                )
                if attempt is not None:
                    result.repaired.append(season_record(link.season, retried.result, link.league_standing))
                else:
                    last = retried or outcome
                    result.erroneous.append(season_record(link.season, last.result, link.league_standing))
        except ReconnectionTimeoutError as e:
            logger.error("❌ Season %s aborted: %s", link.season, e)
            result.erroneous.append(season_record(link.season, [], link.league_standing))
        except Exception as e:
            logger.exception("❌ Season %s failed: %s", link.season, e)
            result.erroneous.append(season_record(link.season, [], link.league_standing))

        logger.info("%s season scraping completed", link.season)

        if i < len(season_links) - 1:
            pause = delay + random.uniform(0, delay_jitter)
            logger.info("Taking %.1fs delay before processing next season...", pause)
            time.sleep(pause)

    written = save_buckets(result, data_dir)
    if export_csv and result.composed:
        composed = result.artifact("composed")
        export_matches_csv(composed, os.path.join(data_dir, COMPOSED_CSV_FILE))
        export_standings_csv(composed, os.path.join(data_dir, COMPOSED_STANDINGS_CSV_FILE))
    log_summary(result, written)
    logger.info("🎉 %s scraping completed.", tournament)
    return result
