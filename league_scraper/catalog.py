# league_scraper/catalog.py
"""
Pre-scraped competition catalog: JSON files of
[{"country": ..., "tournaments": [{"name": ..., "url": ...}]}].
"""

import glob
import json
import logging
import os

from league_scraper.config import CATALOG_DIR

logger = logging.getLogger(__name__)

CONTINENTS = ("Asia", "Africa", "America", "Oceania", "Europe", "World")


def catalog_files(continent=None, catalog_dir=CATALOG_DIR):
    if continent:
        return [os.path.join(catalog_dir, f"{continent.lower()}_competitions.json")]
    return sorted(glob.glob(os.path.join(catalog_dir, "*.json")))


def read_catalog_file(filename):
    try:
        with open(filename, encoding="utf-8") as f:
            return json.load(f) or []
    except FileNotFoundError:
        logger.warning("Failed to retrieve competition URLs. The file named %s does not exist.", filename)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Error occurred when retrieving competition URLs: %s", e)
    return []


def get_competition_urls(continent=None, split_country=None, catalog_dir=CATALOG_DIR):
    """
    Countries and their tournaments, in reverse catalog order.

    With `split_country`, the catalog is cut right after that country
    (a missing country keeps the whole catalog and logs a warning).
    """
    results = []
    for filename in catalog_files(continent, catalog_dir):
        results.extend(read_catalog_file(filename))

    if split_country:
        index = next((i for i, c in enumerate(results) if c.get("country") == split_country), None)
        if index is None:
            logger.warning("Split country %s was not found", split_country)
        else:
            logger.info("Data split with %s as the end country index", split_country)
            results = results[: index + 1]

    return list(reversed(results))
