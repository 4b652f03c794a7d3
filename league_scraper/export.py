# league_scraper/export.py

import logging
import pandas as pd

logger = logging.getLogger(__name__)

MATCH_COLUMNS = [
    "tournament", "season", "gameweek", "date", "time",
    "homeTeam", "awayTeam", "score", "awarded", "statsUrl",
]

STANDING_COLUMNS = [
    "tournament", "season", "rank", "team", "matchPlayed", "won", "draw", "lost",
    "goalsScored", "goalsAllowed", "goalDifference", "points",
]


def matches_dataframe(artifact):
    """One row per match of a {tournament, data} artifact."""
    rows = []
    for season in artifact["data"]:
        for gw in season["gameweeks"]:
            for match in gw["matches"]:
                rows.append({
                    "tournament": artifact["tournament"],
                    "season": season["season"],
                    "gameweek": gw["gameweek"],
                    **match,
                })
    df = pd.DataFrame(rows, columns=MATCH_COLUMNS)
    df["awarded"] = df["awarded"].eq(True)
    return df


def standings_dataframe(artifact):
    rows = [
        {"tournament": artifact["tournament"], "season": season["season"], **row}
        for season in artifact["data"]
        for row in season["leagueStanding"]
    ]
    return pd.DataFrame(rows, columns=STANDING_COLUMNS)


def export_matches_csv(artifact, filename):
    df = matches_dataframe(artifact)
    df.to_csv(filename, index=False)
    logger.info("✅ Saved %d matches → %s", len(df), filename)
    return len(df)


def export_standings_csv(artifact, filename):
    df = standings_dataframe(artifact)
    df.to_csv(filename, index=False)
    logger.info("✅ Saved %d standing rows → %s", len(df), filename)
    return len(df)
