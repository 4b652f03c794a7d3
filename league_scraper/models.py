# league_scraper/models.py
"""Result types passed between crawl stages.

Matches, gameweeks and standing rows stay plain dicts with the camelCase keys
they are persisted under; only the values that carry control flow get types.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SeasonLink:
    season: str
    url: str
    league_standing: list = field(default_factory=list)

    def to_listing(self):
        return {"season": self.season, "url": self.url}


@dataclass(frozen=True)
class ExtractionResult:
    """Either the matches of one gameweek or the reason extraction failed."""

    matches: list = field(default_factory=list)
    error: str | None = None
    details: dict = field(default_factory=dict)

    @property
    def ok(self):
        return self.error is None

    @classmethod
    def success(cls, matches):
        return cls(matches=matches)

    @classmethod
    def failure(cls, error, **details):
        return cls(error=error, details=details)


@dataclass
class ScrapeOutcome:
    has_error_occurred: bool
    result: list = field(default_factory=list)


def season_record(season, gameweeks, league_standing):
    return {"season": season, "gameweeks": gameweeks, "leagueStanding": league_standing}


@dataclass
class TournamentResult:
    """Seasons of one tournament crawl, sorted into three disjoint buckets."""

    tournament: str
    composed: list = field(default_factory=list)
    repaired: list = field(default_factory=list)
    erroneous: list = field(default_factory=list)

    def artifact(self, bucket):
        return {"tournament": self.tournament, "data": getattr(self, bucket)}
