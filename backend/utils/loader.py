# utils/loader.py
"""
CSV loader and column helpers
-----------------------------
Parses an uploaded CSV of article references, normalizes links,
and guesses which columns hold the title and the URL.
"""

import csv
import io
import re
from urllib.parse import urlparse

COLUMN_SAMPLE_ROWS = 50

_TITLE_KEY_RE = re.compile(r"title|headline|name", re.I)
_URL_KEY_RE = re.compile(r"url|link|href|source", re.I)
_HTTP_RE = re.compile(r"^https?://", re.I)


def normalize_url(url):
    """
    Normalize and validate external URLs.
    Returns a valid http(s) URL or None.
    """
    if not url or not isinstance(url, str):
        return None

    u = url.strip()
    if not u:
        return None

    if u.startswith("http://") or u.startswith("https://"):
        return u

    parsed = urlparse(u)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return u

    if "." in u and " " not in u and not parsed.scheme:
        return "https://" + u

    return None


def load_rows(source):
    """
    Parse CSV text (str/bytes) or a file object into a list of row dicts.

    Header names are stripped, missing cells become "", and rows with
    no non-blank cell are dropped.
    """
    if isinstance(source, bytes):
        source = source.decode("utf-8-sig", errors="replace")
    if isinstance(source, str):
        source = io.StringIO(source.lstrip("\ufeff"))

    reader = csv.DictReader(source)
    rows = []

    for raw in reader:
        row = {}
        for key, value in raw.items():
            # overflow cells land under the None key
            if key is None:
                continue
            row[key.strip()] = (value or "").strip() if isinstance(value, str) else ""
        if any(v for v in row.values()):
            rows.append(row)

    return rows


def column_options(rows: list, include_empty: bool = False):
    """Column names seen in the first rows, in first-seen order."""
    keys = []
    for r in rows[:COLUMN_SAMPLE_ROWS]:
        for k in (r or {}):
            if k not in keys:
                keys.append(k)
    return [""] + keys if include_empty else keys


def _best_key(row: dict, score):
    candidates = list(row or {})
    if not candidates:
        return ""
    # sorted() is stable, so ties keep column order
    return sorted(candidates, key=lambda k: -score(k))[0]


def guess_title_key(row: dict):
    def score(k):
        return (2 if _TITLE_KEY_RE.search(k) else 0) + (1 if len(str(row.get(k) or "")) > 15 else 0)
    return _best_key(row, score)


def guess_url_key(row: dict):
    def score(k):
        return (2 if _URL_KEY_RE.search(k) else 0) + (2 if _HTTP_RE.match(str(row.get(k) or "")) else 0)
    return _best_key(row, score)
