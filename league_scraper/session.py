# league_scraper/session.py
"""
Selenium-backed page automation session.

The crawl only talks to the browser through BrowserSession: navigate, wait
for a predicate, extract from the loaded document, click or select. Predicates
and extractors get a BeautifulSoup parse of the rendered page, never the
driver, so they are plain functions over HTML.
"""

import logging

from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
)
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import Select, WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from league_scraper.config import (
    BASE_URL,
    EXTRA_HTTP_HEADERS,
    PAGE_LOAD_TIMEOUT,
    POLL_INTERVAL,
    SNAPSHOT_LIMIT,
    USER_AGENT,
    WAIT_TIMEOUT,
)

logger = logging.getLogger(__name__)


def build_chrome_driver(headless=True, base_url=BASE_URL):
    """Start Chrome with a spoofed user agent and browser-like headers."""
    options = Options()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--disable-gpu")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--window-size=1920,1080")
    options.add_argument(f"user-agent={USER_AGENT}")
    driver = webdriver.Chrome(service=Service(ChromeDriverManager().install()), options=options)

    referer = base_url if base_url.endswith("/") else f"{base_url}/"
    driver.execute_cdp_cmd("Network.enable", {})
    driver.execute_cdp_cmd(
        "Network.setExtraHTTPHeaders",
        {"headers": {**EXTRA_HTTP_HEADERS, "Referer": referer}},
    )
    return driver


class BrowserSession:
    """One browser, used serially for a whole crawl. Builds Chrome when no driver is given."""

    def __init__(self, driver=None, headless=True, base_url=BASE_URL, poll_interval=POLL_INTERVAL):
        self.driver = driver or build_chrome_driver(headless=headless, base_url=base_url)
        self.poll_interval = poll_interval

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self.driver is not None:
            self.driver.quit()
            self.driver = None

    def soup(self):
        return BeautifulSoup(self.driver.page_source, "html.parser")

    def navigate(self, url, timeout=PAGE_LOAD_TIMEOUT):
        logger.debug("Navigating to %s", url)
        self.driver.set_page_load_timeout(timeout)
        self.driver.get(url)

    def wait_for(self, predicate, timeout=WAIT_TIMEOUT, message=""):
        """Poll predicate(soup) until truthy; selenium's TimeoutException after `timeout`."""
        WebDriverWait(self.driver, timeout, poll_frequency=self.poll_interval).until(
            lambda _driver: predicate(self.soup()),
            message or f"Condition not met within {timeout}s (timeout)",
        )

    def wait_for_selector(self, selector, timeout=WAIT_TIMEOUT):
        self.wait_for(
            lambda soup: soup.select_one(selector) is not None,
            timeout,
            f"Selector {selector!r} not found within {timeout}s (timeout)",
        )

    def extract(self, extractor):
        return extractor(self.soup())

    def interact(self, kind, target, value=None):
        """Click an element or pick a <select> option by value."""
        element = self.driver.find_element(By.CSS_SELECTOR, target)
        if kind == "click":
            try:
                element.click()
            except (ElementClickInterceptedException, ElementNotInteractableException):
                # hidden or covered week buttons still take a scripted click
                self.driver.execute_script("arguments[0].click();", element)
        elif kind == "select":
            Select(element).select_by_value(str(value))
        else:
            raise ValueError(f"Unsupported interaction: {kind!r}")

    def snapshot(self, selector=None, limit=SNAPSHOT_LIMIT):
        """Inner HTML of `selector` (or the body), truncated, for issue records."""
        soup = self.soup()
        node = soup.select_one(selector) if selector else soup.body
        if node is None:
            return "No content found"
        return node.decode_contents()[:limit]
