# league_scraper/scrape_leagues.py
"""
Command-line entry point.

    python -m league_scraper.scrape_leagues --continent Europe --leagues-only
"""

import argparse
import logging

from league_scraper.catalog import CONTINENTS, get_competition_urls
from league_scraper.config import (
    BASE_URL,
    CATALOG_DIR,
    DATA_DIR,
    MAX_RESCRAPE_COUNT,
    SEASON_DELAY,
    SEASON_FIRST_YEAR,
    SEASON_LAST_YEAR,
)
from league_scraper.crawler import scrape_leagues
from league_scraper.session import BrowserSession


def build_parser():
    parser = argparse.ArgumentParser(
        description="Scrape league fixtures, results and standings season by season.",
    )
    parser.add_argument("--continent", choices=CONTINENTS, help="Catalog file to load (default: all)")
    parser.add_argument("--split-country", help="Stop the catalog after this country")
    parser.add_argument("--catalog-dir", default=str(CATALOG_DIR))
    parser.add_argument("--output-dir", default=str(DATA_DIR))
    parser.add_argument("--base-url", default=BASE_URL)
    parser.add_argument("--leagues-only", action="store_true",
                        help="Skip competitions without gameweek navigation")
    parser.add_argument("--first-year", type=int, default=SEASON_FIRST_YEAR)
    parser.add_argument("--last-year", type=int, default=SEASON_LAST_YEAR)
    parser.add_argument("--max-rescrape", type=int, default=MAX_RESCRAPE_COUNT)
    parser.add_argument("--season-delay", type=float, default=SEASON_DELAY)
    parser.add_argument("--expected-matches", type=int, default=None,
                        help="Matches per gameweek (default: derived assuming double round-robin)")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    competitions = get_competition_urls(args.continent, args.split_country, args.catalog_dir)
    if not competitions:
        logging.getLogger(__name__).warning("⚠️ No competitions found in %s", args.catalog_dir)
        return 1

    with BrowserSession(headless=not args.headed, base_url=args.base_url) as session:
        scrape_leagues(
            session,
            competitions,
            args.output_dir,
            base_url=args.base_url,
            delay=args.season_delay,
            leagues_only=args.leagues_only,
            max_rescrape_count=args.max_rescrape,
            expected_matches=args.expected_matches,
            first_year=args.first_year,
            last_year=args.last_year,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
