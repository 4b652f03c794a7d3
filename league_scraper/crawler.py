# league_scraper/crawler.py
"""
Country -> tournament loop over a competition catalog, one shared session.
"""

import logging
import os

from league_scraper.config import BASE_URL, METADATA_FILE
from league_scraper.storage import make_dirs
from league_scraper.tournament import scrape_tournament

logger = logging.getLogger(__name__)


def country_dirname(country):
    return country.replace("/", "_").replace(" ", "_")


def write_metadata(country, filename):
    """Record the country once per directory."""
    line = f"Country = {country}\n"
    if os.path.exists(filename):
        with open(filename, encoding="utf-8") as f:
            if line in f.read():
                return
    with open(filename, "a", encoding="utf-8") as f:
        f.write(line)


def scrape_leagues(session, competitions, output_dir, base_url=BASE_URL, **tournament_options):
    """Crawl every tournament of every country; returns the TournamentResults."""
    logger.info("%d countries about to be processed...", len(competitions))
    results = []

    for i, entry in enumerate(competitions, start=1):
        country = entry["country"]
        tournaments = entry.get("tournaments", [])
        logger.info("Scraping %d/%d countries: %s", i, len(competitions), country)

        data_dir = make_dirs(os.path.join(output_dir, country_dirname(country)))
        write_metadata(country, os.path.join(data_dir, METADATA_FILE))

        for j, tournament in enumerate(tournaments, start=1):
            logger.info("[%d/%d] Scraping %s in %s", j, len(tournaments), tournament["name"], country)
            result = scrape_tournament(
                session, tournament["name"], base_url, tournament["url"], data_dir,
                **tournament_options,
            )
            if result is not None:
                results.append(result)

    logger.info("🎉 Scraping completed.")
    return results
