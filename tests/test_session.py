"""Tests for session.py against a mocked WebDriver."""

from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    TimeoutException,
)

from league_scraper.session import BrowserSession

PAGE = "<html><body><div id='week_sel'>Gameweek 2</div><p class='x'>hello</p></body></html>"


@pytest.fixture
def driver():
    driver = MagicMock()
    driver.page_source = PAGE
    return driver


def test_navigate_sets_page_load_timeout(driver):
    BrowserSession(driver).navigate("https://example.com/", timeout=12)

    driver.set_page_load_timeout.assert_called_once_with(12)
    driver.get.assert_called_once_with("https://example.com/")


def test_extract_runs_against_rendered_html(driver):
    session = BrowserSession(driver)
    assert session.extract(lambda soup: soup.select_one(".x").get_text()) == "hello"


def test_wait_for_returns_once_predicate_holds(driver):
    BrowserSession(driver).wait_for(lambda soup: soup.select_one("#week_sel") is not None, timeout=1)


def test_wait_for_times_out(driver):
    with pytest.raises(TimeoutException):
        BrowserSession(driver, poll_interval=0).wait_for(lambda soup: False, timeout=0, message="never (timeout)")


def test_click_falls_back_to_script_when_intercepted(driver):
    element = driver.find_element.return_value
    element.click.side_effect = ElementClickInterceptedException("overlay")

    BrowserSession(driver).interact("click", "#week_next")

    driver.execute_script.assert_called_once_with("arguments[0].click();", element)


def test_click_falls_back_to_script_when_hidden(driver):
    element = driver.find_element.return_value
    element.click.side_effect = ElementNotInteractableException("element not interactable")

    BrowserSession(driver).interact("click", ".week_num.week_3")

    driver.execute_script.assert_called_once_with("arguments[0].click();", element)


def test_select_by_value(driver):
    with patch("league_scraper.session.Select") as select:
        BrowserSession(driver).interact("select", "#week_select", 4)

    select.return_value.select_by_value.assert_called_once_with("4")


def test_unknown_interaction(driver):
    with pytest.raises(ValueError):
        BrowserSession(driver).interact("hover", "#week_next")


def test_snapshot_truncates(driver):
    session = BrowserSession(driver)
    assert session.snapshot(".x") == "hello"
    assert len(session.snapshot(limit=10)) == 10
    assert session.snapshot("#missing") == "No content found"


def test_context_manager_quits_driver(driver):
    with BrowserSession(driver) as session:
        pass
    driver.quit.assert_called_once()
    assert session.driver is None
