# services/text.py
"""
Text Processing Service
-----------------------
Turns scraped article text into term statistics.

Data Structures:
1. Term Frequency:     HashMap<ArticleID, HashMap<Term, Integer>>
2. Document Frequency: HashMap<Term, Integer> (number of articles containing term)

Complexity:
- Tokenize: O(L) where L is text length.
- TF/DF Build: O(N * Avg_Tokens)

Everything here is a pure function of its input; nothing is cached
between calls.
"""

import logging
import re
from collections import defaultdict
from dataclasses import replace

from backend.models import Article
from backend.services.stopwords import STOPWORDS

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://\S+")
_NON_TERM_RE = re.compile(r"[^a-z0-9\s-]")
_SPACE_RE = re.compile(r"\s+")

MIN_TERM_LENGTH = 3


def normalize(text) -> str:
    """Lowercase, drop URLs and punctuation, collapse whitespace."""
    if not isinstance(text, str):
        return ""
    s = text.lower()
    s = _URL_RE.sub(" ", s)
    s = _NON_TERM_RE.sub(" ", s)
    s = _SPACE_RE.sub(" ", s)
    return s.strip()


def tokenize(text) -> list:
    """Normalize and split into terms, skipping stopwords and short tokens."""
    return [
        t for t in normalize(text).split(" ")
        if t and t not in STOPWORDS and len(t) >= MIN_TERM_LENGTH
    ]


def as_articles(articles) -> list:
    """
    Coerce a list of dicts (or Articles) into Article records with unique ids.

    A missing id becomes a<index>; a missing or repeated id that is already
    taken gets a -2, -3, ... suffix until it is free. The first article
    carrying an explicit id always keeps it.
    """
    records = [Article.from_dict(a) for a in articles or []]
    used = {r.id for r in records if r.id}
    kept = set()
    out = []

    for i, r in enumerate(records):
        if not r.id or r.id in kept:
            base = r.id or f"a{i}"
            aid = base
            n = 2
            while aid in used:
                aid = f"{base}-{n}"
                n += 1
            used.add(aid)
            r = replace(r, id=aid)
        kept.add(r.id)
        out.append(r)

    return out


def compute_tf_df(articles):
    """
    Compute per-article term frequency and corpus-wide document frequency.

    Returns:
        tuple:
          - doc_tfs (dict article_id -> {term: count})
          - df (dict term -> number of articles containing it)
    """
    doc_tfs = {}
    df = defaultdict(int)

    for a in as_articles(articles):
        tf = defaultdict(int)
        seen_in_article = set()

        for t in tokenize(f"{a.title} {a.text}"):
            tf[t] += 1
            seen_in_article.add(t)

        doc_tfs[a.id] = dict(tf)

        # df counts articles, not occurrences
        for t in seen_in_article:
            df[t] += 1

    logger.debug("tf/df built for %d articles, %d distinct terms", len(doc_tfs), len(df))
    return doc_tfs, dict(df)
