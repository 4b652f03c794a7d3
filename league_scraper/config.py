# league_scraper/config.py
"""Central configuration for the league season scraper.

Single source of truth for site selectors, timeouts, retry budgets, delays
and artifact names. Functions take these as keyword defaults so callers and
tests can override any of them per call.
"""

from pathlib import Path
from typing import Final

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = PROJECT_ROOT / "data"
CATALOG_DIR: Final[Path] = PROJECT_ROOT / "scrapedURLs"

# ---------------------------------------------------------------------------
# Site
# ---------------------------------------------------------------------------

BASE_URL: Final[str] = "https://globalsportsarchive.com"

USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

EXTRA_HTTP_HEADERS: Final[dict[str, str]] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# ---------------------------------------------------------------------------
# Timeouts (seconds)
# ---------------------------------------------------------------------------

PAGE_LOAD_TIMEOUT: Final[float] = 60.0
SEASON_PAGE_TIMEOUT: Final[float] = 45.0
WAIT_TIMEOUT: Final[float] = 60.0
POLL_INTERVAL: Final[float] = 0.5

# ---------------------------------------------------------------------------
# Retry / reconnection
# ---------------------------------------------------------------------------

MAX_RETRIES: Final[int] = 3
BACKOFF_BASE: Final[float] = 2.0
RECONNECT_POLL_INTERVAL: Final[float] = 5.0
MAX_WAIT_FOR_RECONNECT: Final[float] = 600.0
REACHABILITY_PROBE_URL: Final[str] = "https://www.google.com"
REACHABILITY_PROBE_TIMEOUT: Final[float] = 5.0

# Substrings of driver error messages that mark a recoverable network failure.
NETWORK_ERROR_MARKERS: Final[tuple[str, ...]] = (
    "net::ERR_INTERNET_DISCONNECTED",
    "net::ERR_NAME_NOT_RESOLVED",
    "net::ERR_CONNECTION_",
    "net::ERR_NETWORK_CHANGED",
    "timeout",
    "timed out",
)

# ---------------------------------------------------------------------------
# Crawl pacing and budgets
# ---------------------------------------------------------------------------

MAX_GAMEWEEK_RETRIES: Final[int] = 3
SPARSITY_RATIO: Final[float] = 0.5
GAMEWEEK_DELAY: Final[float] = 3.0
GAMEWEEK_DELAY_JITTER: Final[float] = 2.0
SEASON_CHECK_DELAY: Final[float] = 3.0
SEASON_CHECK_DELAY_JITTER: Final[float] = 2.0
SEASON_DELAY: Final[float] = 5.0
SEASON_DELAY_JITTER: Final[float] = 2.0
MAX_RESCRAPE_COUNT: Final[int] = 3

# ---------------------------------------------------------------------------
# Season range (inclusive, on the first year of a "YYYY/YYYY" label)
# ---------------------------------------------------------------------------

SEASON_FIRST_YEAR: Final[int] = 2019
SEASON_LAST_YEAR: Final[int] = 2025
SEASON_LABEL_PATTERN: Final[str] = r"(20\d{2})/(20\d{2})"

# ---------------------------------------------------------------------------
# Page selectors
# ---------------------------------------------------------------------------

SELECTOR_SCORE: Final[str] = ".gsa-c-match-c3"
SELECTOR_WEEK_LABEL: Final[str] = "#week_sel"
SELECTOR_WEEK_BUTTONS: Final[str] = "#weeks .week_num"
SELECTOR_WEEK_BUTTON: Final[str] = ".week_num.week_{week}"
SELECTOR_WEEK_DROPDOWN: Final[str] = "#week_select"
SELECTOR_WEEK_PREV: Final[str] = "#week_prev"
SELECTOR_WEEK_NEXT: Final[str] = "#week_next"
SELECTOR_MAX_WEEK: Final[str] = "#maxweek"
SELECTOR_WEEK_CONTAINER: Final[str] = "#week_container"
SELECTOR_ROW: Final[str] = ".gsa-c-match-row"
SELECTOR_MATCH_ROW: Final[str] = "#week_container .gsa-c-match-row"
SELECTOR_MATCH_TIME: Final[str] = ".gsa-c-match-c1"
SELECTOR_HOME_TEAM: Final[str] = ".gsa-c-match-c2 .gsa-c-team_full"
SELECTOR_AWAY_TEAM: Final[str] = ".gsa-c-match-c4 .gsa-c-team_full"

SELECTOR_STANDING_ROW: Final[str] = ".player_row"
SELECTOR_STANDING_TEAM: Final[str] = ".col_name .fullname"
SELECTOR_STANDING_RANK: Final[str] = ".col_shirt"
SELECTOR_STANDINGS_CONTAINER: Final[str] = ":has(> .gsa_subheader_2)"

# Standings columns .col_p1 .. .col_p8, in order.
STANDING_COLUMNS: Final[tuple[str, ...]] = (
    "matchPlayed",
    "won",
    "draw",
    "lost",
    "goalsScored",
    "goalsAllowed",
    "goalDifference",
    "points",
)

UNPLAYED_SCORE: Final[str] = ":"
AWARDED_MARKER: Final[str] = "AWD"
DATE_HEADING_STYLE: Final[str] = "font-weight:bold"
SNAPSHOT_LIMIT: Final[int] = 2000

# ---------------------------------------------------------------------------
# Artifact names
# ---------------------------------------------------------------------------

SEASONS_LIST_FILE: Final[str] = "seasons_list.json"
COMPOSED_FILE: Final[str] = "composed.json"
REPAIRED_FILE: Final[str] = "repaired.json"
ERRONEOUS_FILE: Final[str] = "erroneous.json"
COMPOSED_CSV_FILE: Final[str] = "composed_matches.csv"
COMPOSED_STANDINGS_CSV_FILE: Final[str] = "composed_standings.csv"
METADATA_FILE: Final[str] = "metadata.txt"
RETRIES_DIRNAME: Final[str] = "retries"

SEASONS_ISSUES_LOG: Final[str] = "seasons_scrape_issues.log"
STANDINGS_ISSUES_LOG: Final[str] = "standings_scrape_issues.log"
GAMEWEEK_ISSUES_LOG: Final[str] = "gameweek_scrape_issues.log"
VERIFICATION_ISSUES_LOG: Final[str] = "gameweek_verification_issues.log"
