# league_scraper/waits.py
"""Stabilization predicates for ``BrowserSession.wait_for``.

Progressive rendering means an element count can still be growing when the
first row shows up. Each factory returns a fresh predicate that remembers the
count seen on its previous poll, so two waits never share state.
"""

import re

from league_scraper.config import SEASON_LABEL_PATTERN


def count_stabilized(selector, row_ready=None):
    """True once ``selector`` matches a positive, unchanged count of ready elements."""
    previous = None

    def predicate(soup):
        nonlocal previous
        rows = soup.select(selector)
        count = len(rows)
        stable = count > 0 and count == previous
        previous = count
        if not stable:
            return False
        return row_ready is None or all(row_ready(row) for row in rows)

    return predicate


def find_season_select(soup):
    """The last ``<select>`` on the page with an option labelled like 2022/2023."""
    pattern = re.compile(SEASON_LABEL_PATTERN)
    season_select = None
    for select in soup.find_all("select"):
        if any(pattern.search(option.get_text()) for option in select.find_all("option")):
            season_select = select
    return season_select


def option_count_stabilized():
    """True once the season select exists and its option count has stopped changing."""
    previous = None

    def predicate(soup):
        nonlocal previous
        select = find_season_select(soup)
        if select is None:
            return False
        count = len(select.find_all("option"))
        stable = count > 0 and count == previous
        previous = count
        return stable

    return predicate
