#!/usr/bin/env python3
"""
rank_keywords.py

Purpose:
- Load a JSON array of scraped articles ({id, title, url?, text})
- Print the top TF-IDF keywords
- Optionally write the relevance graph for a set of keywords

Run from project root:
    python scripts/rank_keywords.py articles.json --top 30
    python scripts/rank_keywords.py articles.json --select gravity,bone --graph-out graph.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from backend.config import get_settings, setup_logging  # noqa: E402
from backend.services.graph import build_graph  # noqa: E402
from backend.services.ranking import rank_keywords  # noqa: E402
from backend.services.selection import KeywordSelection  # noqa: E402
from backend.services.text import as_articles, compute_tf_df  # noqa: E402

logger = logging.getLogger("rank_keywords")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rank article keywords by TF-IDF")
    parser.add_argument("articles", type=Path, help="JSON array of articles")
    parser.add_argument("--top", type=int, default=None, help="number of keywords to print")
    parser.add_argument("--select", default="", help="comma-separated keywords for the graph")
    parser.add_argument("--graph-out", type=Path, default=None, help="where to write graph JSON")
    return parser.parse_args(argv)


def main(argv=None):
    settings = get_settings()
    setup_logging(settings.log_level)
    args = parse_args(argv)

    # -------- Load --------
    if not args.articles.exists():
        raise SystemExit(f"Error: {args.articles} not found.")

    with args.articles.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise SystemExit("Error: articles file must be a JSON array.")

    articles = as_articles(raw)
    tf_df = compute_tf_df(articles)

    # -------- Rank --------
    top = settings.max_terms if args.top is None else args.top
    for i, stat in enumerate(rank_keywords(articles, top, tf_df=tf_df), 1):
        print(f"{i:>4}  {stat.term:<30} df={stat.df:<5} tfidf={stat.tfidf:.3f}")

    # -------- Graph --------
    selected = KeywordSelection(args.select.split(",")).terms
    if args.graph_out:
        graph = build_graph(articles, selected, tf_df[0])
        with args.graph_out.open("w", encoding="utf-8") as f:
            json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("graph written to %s (%d nodes, %d links)", args.graph_out, len(graph.nodes), len(graph.links))


if __name__ == "__main__":
    main()
