# league_scraper/sequencing.py

from league_scraper.cleaning import earliest_valid_date, is_iso_date, match_signature

LATEST_DATE = "9999-12-31"


def match_date_key(match):
    date = match.get("date")
    return date if is_iso_date(date) else LATEST_DATE


def sort_gameweeks_by_date(gameweeks):
    """
    Put gameweeks in chronological order and renumber them from 1.

    - drops gameweeks with no validly dated match
    - drops a gameweek whose set of match signatures equals an earlier one
    - orders gameweeks by their earliest valid date, and matches inside a
      gameweek by date (undated matches last)
    """
    dated = [gw for gw in gameweeks if gw.get("matches") and earliest_valid_date(gw["matches"])]

    unique = []
    seen = set()
    for gw in dated:
        signature = tuple(sorted("|".join(str(v) for v in match_signature(m)) for m in gw["matches"]))
        if signature in seen:
            continue
        seen.add(signature)
        unique.append(gw)

    # sorted() is stable: ties keep navigation order
    unique = sorted(unique, key=lambda gw: earliest_valid_date(gw["matches"]))

    return [
        {"gameweek": i, "matches": sorted(gw["matches"], key=match_date_key)}
        for i, gw in enumerate(unique, start=1)
    ]
