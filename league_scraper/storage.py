# league_scraper/storage.py

import json
import logging
import os
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def normalize_filepath(name):
    return re.sub(r"[\s:/$\\]", "_", name)


def season_id_from_url(url):
    """
    Season pages look like https://host/.../<slug>/<season_id>/ -- return the
    second-to-last path segment (or the last one when there is no trailing slash).
    """
    parts = urlparse(url).path.split("/")
    if len(parts) >= 2 and parts[-1] == "":
        return parts[-2]
    return parts[-1]


def make_dirs(path):
    os.makedirs(path, exist_ok=True)
    return path


def write_json(path, value):
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write a file: %s [%s]", e, path)


def append_json(path, value):
    """Append one JSON document followed by a blank line (issue logs)."""
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(value, indent=2, ensure_ascii=False) + "\n\n")
    except OSError as e:
        logger.error("Failed to append a file: %s [%s]", e, path)


def read_json(path):
    if not os.path.exists(path):
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)
