# league_scraper/issues.py
"""
Append-only Issue records. Each stage that hits an anomaly appends one JSON
document per Issue to its own *_issues.log file; entries are never rewritten.
"""

import logging
from datetime import datetime, timezone

from league_scraper.storage import append_json

logger = logging.getLogger(__name__)

WARNING = "warning"
ERROR = "error"


class IssueLog:
    """Issue log bound to a single file."""

    def __init__(self, path):
        self.path = path

    def record(self, type, message, season_url, gameweek=None, html_snapshot=None, **details):
        if type not in (WARNING, ERROR):
            raise ValueError(f"Unknown issue type: {type!r}")
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "seasonUrl": season_url,
            "type": type,
            "message": message,
            "details": details,
        }
        if gameweek is not None:
            entry["gameweek"] = gameweek
        if html_snapshot is not None:
            entry["htmlSnapshot"] = html_snapshot
        append_json(self.path, entry)
        return entry

    def warning(self, message, season_url, **kwargs):
        logger.warning(message)
        return self.record(WARNING, message, season_url, **kwargs)

    def error(self, message, season_url, **kwargs):
        logger.error(message)
        return self.record(ERROR, message, season_url, **kwargs)
