# services/ranking.py
"""
Keyword Ranking Service
-----------------------
Ranks corpus terms by TF-IDF so the client can offer the most
characteristic keywords of the uploaded articles.

Score(term) = Sum over articles of TF(article, term) * IDF(term)
IDF(term)   = ln((N + 1) / (1 + DF(term))) + 1

Complexity:
- Scoring: O(N * Avg_Distinct_Terms)
- Sorting: O(T log T) where T = distinct terms.
"""

import math
from collections import defaultdict

from backend.models import KeywordStat
from backend.services.text import as_articles, compute_tf_df

DEFAULT_MAX_TERMS = 200
HISTOGRAM_SIZE = 20


def idf(df: int, n_docs: int) -> float:
    """Smoothed inverse document frequency; rarer terms weigh more."""
    n = max(1, n_docs)
    return math.log((n + 1) / (1 + df)) + 1.0


def rank_keywords(articles, max_terms: int = DEFAULT_MAX_TERMS, tf_df=None):
    """
    Rank every corpus term by its summed TF-IDF.

    Ties on score are broken alphabetically so the order never depends on
    dict iteration.

    Args:
        articles: list of Article records or dicts
        max_terms: upper bound on the result length (negative counts as 0)
        tf_df: optional precomputed (doc_tfs, df) for the same articles

    Returns:
        list of KeywordStat, best first
    """
    articles = as_articles(articles)
    limit = max(0, int(max_terms or 0))
    if not articles or limit == 0:
        return []

    doc_tfs, df = tf_df if tf_df is not None else compute_tf_df(articles)
    n_docs = max(1, len(articles))

    scores = defaultdict(float)
    for a in articles:
        for term, freq in doc_tfs.get(a.id, {}).items():
            scores[term] += freq * idf(df.get(term, 0), n_docs)

    ranked = [
        KeywordStat(term=term, df=df.get(term, 0), tfidf=score)
        for term, score in scores.items()
    ]
    ranked.sort(key=lambda s: (-s.tfidf, s.term))
    return ranked[:limit]


def filter_ranked(ranked: list, query: str):
    """Keep stats whose term contains the (lowercased) query substring."""
    q = (query or "").strip().lower() if isinstance(query, str) else ""
    if not q:
        return list(ranked)
    return [s for s in ranked if q in s.term]


def histogram_data(ranked: list, limit: int = HISTOGRAM_SIZE):
    """
    Document-frequency histogram over the top ranked terms.

    Returns:
        list of dicts: {term, count}, highest count first
    """
    items = [{"term": s.term, "count": s.df} for s in ranked[:max(0, limit)]]
    items.sort(key=lambda x: x["count"], reverse=True)
    return items
