# league_scraper/seasons.py
"""
Season discovery for one tournament.

Reads the season <select> on the tournament landing page, keeps the labels
whose first year falls in the configured range, and accepts a season only if
its league table has at least one team with matches played.
"""

import logging
import os
import random
import re
import time

from league_scraper.config import (
    SEASON_CHECK_DELAY,
    SEASON_CHECK_DELAY_JITTER,
    SEASON_FIRST_YEAR,
    SEASON_LABEL_PATTERN,
    SEASON_LAST_YEAR,
    SEASON_PAGE_TIMEOUT,
    SEASONS_ISSUES_LOG,
    SEASONS_LIST_FILE,
    SELECTOR_WEEK_LABEL,
)
from league_scraper.exceptions import ReconnectionTimeoutError
from league_scraper.issues import IssueLog
from league_scraper.models import SeasonLink
from league_scraper.retry import with_retry
from league_scraper.standings import scrape_league_standing
from league_scraper.storage import make_dirs, write_json
from league_scraper.waits import find_season_select, option_count_stabilized

logger = logging.getLogger(__name__)

GAMEWEEK_LABEL_RE = re.compile(r"^Gameweek\s+\d+", re.IGNORECASE)


def read_season_options(soup):
    season_select = find_season_select(soup)
    if season_select is None:
        return []
    options = []
    for option in season_select.find_all("option"):
        url = (option.get("value") or "").strip()
        if url:
            options.append({"season": option.get_text(strip=True), "url": url})
    return options


def season_first_year(label):
    match = re.search(SEASON_LABEL_PATTERN, label)
    return int(match.group(1)) if match else None


def filter_target_seasons(options, first_year=SEASON_FIRST_YEAR, last_year=SEASON_LAST_YEAR):
    """Keep 'YYYY/YYYY' seasons whose first year lies in [first_year, last_year]."""
    targets = []
    for option in options:
        year = season_first_year(option["season"])
        if year is not None and first_year <= year <= last_year:
            targets.append(option)
    return targets


def is_league_competition(soup):
    """Leagues show a 'Gameweek N' label; cups and friendlies don't."""
    label = soup.select_one(SELECTOR_WEEK_LABEL)
    if label is None:
        return False
    return bool(GAMEWEEK_LABEL_RE.match(label.get_text(" ", strip=True)))


def resolve_season_url(url, base_url):
    return url if url.startswith("http") else f"{base_url.rstrip('/')}{url}"


def scrape_season_links(
    session,
    base_url,
    page_url,
    output_dir,
    leagues_only=False,
    first_year=SEASON_FIRST_YEAR,
    last_year=SEASON_LAST_YEAR,
    timeout=SEASON_PAGE_TIMEOUT,
    check_delay=SEASON_CHECK_DELAY,
    check_delay_jitter=SEASON_CHECK_DELAY_JITTER,
):
    """
    Discover the seasons of a tournament worth scraping.

    Returns a list of SeasonLink (possibly empty when nothing was found or the
    landing page failed), or None when `leagues_only` is set and the
    tournament has no gameweek navigation.
    """
    make_dirs(output_dir)
    issues = IssueLog(os.path.join(output_dir, SEASONS_ISSUES_LOG))

    try:
        with_retry(lambda: session.navigate(page_url, timeout))

        def wait_for_season_select():
            session.wait_for_selector("select", timeout)
            session.wait_for(
                option_count_stabilized(),
                timeout,
                f"Season dropdown did not stabilize within {timeout}s (timeout)",
            )

        with_retry(wait_for_season_select)

        if leagues_only and not session.extract(is_league_competition):
            issues.warning("Non-league season skipped", page_url)
            return None

        season_options = session.extract(read_season_options)
        if not season_options:
            issues.error(
                "No seasons found in dropdown. Possible issue with selector or dynamic loading.",
                page_url,
                html_snapshot=session.snapshot(),
            )
            return []

        target_seasons = filter_target_seasons(season_options, first_year, last_year)
        logger.info(
            "📋 Found %d seasons to check: %s",
            len(target_seasons),
            ", ".join(s["season"] for s in target_seasons),
        )

        valid_seasons = []
        for i, option in enumerate(target_seasons):
            label = option["season"]
            season_url = resolve_season_url(option["url"], base_url)
            logger.info("🔄 Checking season %s...", label)
            try:
                with_retry(lambda: session.navigate(season_url, timeout))
                standings = scrape_league_standing(
                    session,
                    season_url,
                    os.path.join(output_dir, label.replace("/", "_")),
                    timeout=timeout,
                )
                if standings:
                    valid_seasons.append(SeasonLink(label, season_url, standings))
                    logger.info("✅ Season %s has match results and will be scraped.", label)
                else:
                    issues.warning(f"No match results found for season {label}. Skipping.", season_url)
            except ReconnectionTimeoutError:
                raise
            except Exception as e:
                issues.error(f"Error checking season {label}: {e}", season_url)

            if i < len(target_seasons) - 1:
                time.sleep(check_delay + random.uniform(0, check_delay_jitter))

        output_file = os.path.join(output_dir, SEASONS_LIST_FILE)
        write_json(output_file, [s.to_listing() for s in valid_seasons])
        logger.info("Valid seasons saved to %s", output_file)
        return valid_seasons

    except Exception as e:
        logger.exception("Error scraping seasons dropdown")
        issues.error(
            f"Error scraping seasons dropdown: {e}",
            page_url,
            html_snapshot=_safe_snapshot(session),
        )
        return []


def _safe_snapshot(session):
    try:
        return session.snapshot()
    except Exception as e:
        return f"Snapshot unavailable: {e}"
