# league_scraper/retry.py
"""
Bounded retry with exponential backoff and a reconnection wait loop.
Every page navigation and wait in the crawl goes through with_retry.
"""

import logging
import time
from dataclasses import dataclass

import requests

from league_scraper.config import (
    BACKOFF_BASE,
    MAX_RETRIES,
    MAX_WAIT_FOR_RECONNECT,
    REACHABILITY_PROBE_TIMEOUT,
    REACHABILITY_PROBE_URL,
    RECONNECT_POLL_INTERVAL,
)
from league_scraper.exceptions import ReconnectionTimeoutError, is_recoverable_network_error

logger = logging.getLogger(__name__)


@dataclass
class RetryState:
    attempt: int = 0
    last_error: Exception | None = None


def is_network_reachable(url=REACHABILITY_PROBE_URL, timeout=REACHABILITY_PROBE_TIMEOUT):
    """HEAD a small well-known resource; True if anything answers."""
    try:
        requests.head(url, timeout=timeout)
    except requests.RequestException:
        return False
    return True


def wait_for_reconnection(probe=None, max_wait=MAX_WAIT_FOR_RECONNECT,
                          poll_interval=RECONNECT_POLL_INTERVAL, sleep=None, clock=None):
    """
    Poll `probe` until it succeeds and return the seconds waited.
    Raises ReconnectionTimeoutError once `max_wait` has elapsed.
    """
    probe = probe or is_network_reachable
    sleep = sleep or time.sleep
    clock = clock or time.monotonic
    start = clock()
    while True:
        waited = clock() - start
        if waited >= max_wait:
            raise ReconnectionTimeoutError(waited, max_wait)
        if probe():
            logger.info("Network reachable again after %.0fs", waited)
            return waited
        logger.debug("Network still unreachable, polling again in %.0fs", poll_interval)
        sleep(poll_interval)


def with_retry(operation, max_retries=MAX_RETRIES, max_wait_for_reconnect=MAX_WAIT_FOR_RECONNECT,
               backoff_base=BACKOFF_BASE, probe=None, sleep=None, clock=None,
               poll_interval=RECONNECT_POLL_INTERVAL):
    """
    Run `operation` and retry it on recoverable network errors.

    Before each retry: sleep backoff_base ** attempt seconds, then wait for the
    network to answer again. Other errors propagate immediately; when the
    attempts run out the last error is re-raised.
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")
    sleep = sleep or time.sleep
    state = RetryState()
    while state.attempt < max_retries:
        state.attempt += 1
        try:
            return operation()
        except Exception as error:
            state.last_error = error
            if not is_recoverable_network_error(error) or state.attempt >= max_retries:
                raise
            delay = backoff_base ** state.attempt
            logger.warning("Retry %d/%d after %.0fs: %s", state.attempt, max_retries, delay, error)
            sleep(delay)
            logger.warning("Network error detected. Waiting for reconnection...")
            wait_for_reconnection(
                probe=probe,
                max_wait=max_wait_for_reconnect,
                poll_interval=poll_interval,
                sleep=sleep,
                clock=clock,
            )
    raise state.last_error
