# league_scraper/cleaning.py

import re
import pandas as pd

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_iso_date(value):
    return isinstance(value, str) and bool(ISO_DATE_RE.match(value))


# -- Normalise a date heading --
def normalize_match_date(date_value):
    """
    Turn a date heading into a 'YYYY-MM-DD' string.
    ISO strings pass through untouched; anything pandas can parse is
    reformatted; anything else comes back stripped so verification can flag it.
    """
    if date_value is None or (not isinstance(date_value, str) and pd.isna(date_value)):
        return ""
    text = str(date_value).strip()
    if not text or is_iso_date(text):
        return text
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return text
    return parsed.strftime("%Y-%m-%d")


# -- Absolute stats links --
def absolute_url(href, base_url):
    if not href:
        return ""
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith("/"):
        return f"{base_url.rstrip('/')}{href}"
    return href


# -- Integer table cells --
def parse_int(text):
    """
    Parse a table cell as an int ('-3', '+12', ' 7 ').
    Blank or non-numeric cells count as 0.
    """
    if text is None:
        return 0
    match = re.match(r"^\s*([+-]?\d+)", str(text))
    if not match:
        return 0
    return int(match.group(1))


def earliest_valid_date(matches):
    """Earliest ISO date among matches, or None if none has a valid date."""
    dates = sorted(m.get("date") for m in matches if is_iso_date(m.get("date")))
    return dates[0] if dates else None


def match_signature(match):
    return (match.get("homeTeam"), match.get("awayTeam"), match.get("date"), match.get("score"))
