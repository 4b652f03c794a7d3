# league_scraper/verification.py
"""
Cross-gameweek checks over a season's accepted gameweeks.

Duplicate match signatures are fatal (the accept-time check should have made
them impossible). Sparse gameweeks, bad dates and empty gameweeks are only
reported; the data comes back unchanged.
"""

import logging
import math
import os

from league_scraper.cleaning import is_iso_date, match_signature
from league_scraper.config import SPARSITY_RATIO, VERIFICATION_ISSUES_LOG
from league_scraper.exceptions import DataIntegrityError
from league_scraper.issues import ERROR, WARNING, IssueLog

logger = logging.getLogger(__name__)


def find_duplicate_matches(gameweeks):
    seen = set()
    duplicates = []
    for gw in gameweeks:
        for match_index, match in enumerate(gw["matches"]):
            signature = match_signature(match)
            if signature in seen:
                duplicates.append({"gameweek": gw["gameweek"], "matchIndex": match_index, "match": match})
            else:
                seen.add(signature)
    return duplicates


def verify_gameweek_data(gameweeks, expected_matches_per_gameweek, season_url, output_dir,
                         sparsity_ratio=SPARSITY_RATIO):
    """
    Returns (gameweeks, report) where report is a list of
    {type, message, details} records, also appended to the verification log.

    Raises DataIntegrityError when two matches share a signature.
    """
    issues = IssueLog(os.path.join(output_dir, VERIFICATION_ISSUES_LOG))
    report = []

    def log_issue(message, type=WARNING, **details):
        issues.record(type, message, season_url, **details)
        report.append({"type": type, "message": message, "details": details})

    # -- Duplicates across all gameweeks --
    duplicates = find_duplicate_matches(gameweeks)
    if duplicates:
        log_issue(f"Found {len(duplicates)} duplicate matches", ERROR, duplicates=duplicates)
        raise DataIntegrityError(duplicates)

    # -- Fewer matches than expected --
    threshold = math.floor(expected_matches_per_gameweek * sparsity_ratio)
    for gw in gameweeks:
        if 0 < len(gw["matches"]) < threshold:
            log_issue(
                f"Gameweek {gw['gameweek']} has fewer matches than expected: "
                f"{len(gw['matches'])} found, expected ~{expected_matches_per_gameweek}",
                gameweek=gw["gameweek"],
                matches=gw["matches"],
            )

    # -- Missing or malformed dates --
    for gw in gameweeks:
        invalid = [m for m in gw["matches"] if not is_iso_date(m.get("date"))]
        if invalid:
            log_issue(
                f"Gameweek {gw['gameweek']} contains matches with invalid or missing dates",
                gameweek=gw["gameweek"],
                invalidMatches=invalid,
            )

    # -- Empty gameweeks --
    for gw in gameweeks:
        if not gw["matches"]:
            log_issue(f"Gameweek {gw['gameweek']} is empty (no matches)", gameweek=gw["gameweek"])

    for entry in report:
        logger.info("[%s] %s", entry["type"].upper(), entry["message"])

    return gameweeks, report
