# league_scraper/navigation.py
"""
Reaching an arbitrary gameweek on a season page.

Season pages offer one of three ways to switch gameweeks: a row of index
buttons, a <select>, or only previous/next arrows. The affordance is detected
once per season and its strategy is reused for every gameweek of that season.
"""

import enum
import logging
import re

from league_scraper.config import (
    SELECTOR_WEEK_BUTTON,
    SELECTOR_WEEK_BUTTONS,
    SELECTOR_WEEK_DROPDOWN,
    SELECTOR_WEEK_LABEL,
    SELECTOR_WEEK_NEXT,
    SELECTOR_WEEK_PREV,
    WAIT_TIMEOUT,
)
from league_scraper.exceptions import NavigationError, ReconnectionTimeoutError
from league_scraper.retry import with_retry

logger = logging.getLogger(__name__)


class NavigationState(enum.Enum):
    UNKNOWN = "unknown"
    NAVIGATING = "navigating"
    CONFIRMED = "confirmed"
    FAILED = "failed"


def displayed_gameweek(soup):
    """The index shown in the 'Gameweek N' label, or None if absent."""
    label = soup.select_one(SELECTOR_WEEK_LABEL)
    if label is None:
        return None
    match = re.search(r"\d+", label.get_text())
    return int(match.group()) if match else None


class NavigationStrategy:
    """Base class: one way of moving the page to a gameweek index."""

    name = "base"

    def __init__(self, session, timeout=WAIT_TIMEOUT):
        self.session = session
        self.timeout = timeout

    def go_to(self, target):
        raise NotImplementedError

    def wait_for_label(self, target):
        self.session.wait_for(
            lambda soup: displayed_gameweek(soup) == target,
            self.timeout,
            f"Gameweek label did not show {target} within {self.timeout}s (timeout)",
        )


class IndexButtonStrategy(NavigationStrategy):
    name = "index-buttons"

    def go_to(self, target):
        self.session.interact("click", SELECTOR_WEEK_BUTTON.format(week=target))
        self.wait_for_label(target)


class DropdownStrategy(NavigationStrategy):
    name = "dropdown"

    def go_to(self, target):
        self.session.interact("select", SELECTOR_WEEK_DROPDOWN, str(target))
        self.wait_for_label(target)


class SequentialStrategy(NavigationStrategy):
    """Step one gameweek at a time with the previous/next arrows."""

    name = "sequential"

    def go_to(self, target):
        current = self.session.extract(displayed_gameweek)
        if current is None:
            raise NavigationError(target, reason="no gameweek label on the page")
        max_steps = abs(target - current)
        steps = 0
        while current != target:
            if steps >= max_steps:
                raise NavigationError(target, current, "stepping overshot the target")
            step = 1 if target > current else -1
            self.session.interact("click", SELECTOR_WEEK_NEXT if step > 0 else SELECTOR_WEEK_PREV)
            self.wait_for_label(current + step)
            current += step
            steps += 1


def detect_strategy(soup):
    """Pick the richest affordance the page offers, in priority order."""
    if soup.select_one(SELECTOR_WEEK_BUTTONS) is not None:
        return IndexButtonStrategy
    if soup.select_one(SELECTOR_WEEK_DROPDOWN) is not None:
        return DropdownStrategy
    return SequentialStrategy


class GameweekNavigator:
    """
    Moves a season page between gameweeks and tracks where it stands:
    UNKNOWN -> NAVIGATING -> CONFIRMED | FAILED. The strategy is bound on the
    first go_to and kept for the rest of the season.
    """

    def __init__(self, session, timeout=WAIT_TIMEOUT, max_retries=None):
        self.session = session
        self.timeout = timeout
        self.max_retries = max_retries
        self.strategy = None
        self.state = NavigationState.UNKNOWN
        self.current = None
        self.target = None

    def bind_strategy(self):
        if self.strategy is None:
            strategy_cls = self.session.extract(detect_strategy)
            self.strategy = strategy_cls(self.session, self.timeout)
            logger.debug("Gameweek navigation strategy: %s", self.strategy.name)
        return self.strategy

    def go_to(self, target):
        """
        Navigate to gameweek `target` and confirm the page shows it.
        Raises NavigationError, or ReconnectionTimeoutError when the network
        never comes back.
        """
        strategy = self.bind_strategy()
        self.state = NavigationState.NAVIGATING
        self.target = target
        retry_kwargs = {} if self.max_retries is None else {"max_retries": self.max_retries}
        try:
            with_retry(lambda: strategy.go_to(target), **retry_kwargs)
        except ReconnectionTimeoutError:
            self.state = NavigationState.FAILED
            raise
        except NavigationError:
            self.state = NavigationState.FAILED
            raise
        except Exception as e:
            self.state = NavigationState.FAILED
            raise NavigationError(target, self._read_current(), str(e)) from e
        self.state = NavigationState.CONFIRMED
        self.current = target

    def _read_current(self):
        try:
            return self.session.extract(displayed_gameweek)
        except Exception:
            return None
