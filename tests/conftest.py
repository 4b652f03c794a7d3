"""Shared test configuration and fixtures.

Sleeps are disabled and the reachability probe always succeeds so that retry
and pacing paths run instantly and never touch the network.
"""

import pytest


@pytest.fixture(autouse=True)
def no_waiting(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)
    monkeypatch.setattr("league_scraper.retry.is_network_reachable", lambda *a, **k: True)
