"""Tests for TF-IDF keyword ranking."""

import math

import pytest

from backend.models import Article, KeywordStat
from backend.services.ranking import filter_ranked, histogram_data, idf, rank_keywords
from backend.services.text import compute_tf_df


class TestIdf:
    def test_formula(self):
        assert idf(1, 3) == pytest.approx(math.log(4 / 2) + 1)

    def test_term_in_every_document_weighs_one(self):
        assert idf(10, 10) == pytest.approx(1.0)

    def test_rarer_terms_weigh_more(self):
        weights = [idf(df, 10) for df in range(0, 11)]
        assert all(a > b for a, b in zip(weights, weights[1:]))


class TestRankKeywords:
    def test_frequency_scales_score(self):
        docs = [
            Article(id="d1", text="gravity"),
            Article(id="d2", text="gravity gravity gravity"),
        ]
        doc_tfs, df = compute_tf_df(docs)
        weight = idf(df["gravity"], 2)

        ranked = rank_keywords(docs, 10)

        assert ranked == [KeywordStat(term="gravity", df=2, tfidf=pytest.approx(4 * weight))]
        assert doc_tfs["d2"]["gravity"] * weight == pytest.approx(3 * doc_tfs["d1"]["gravity"] * weight)

    def test_one_stat_per_distinct_term(self, corpus):
        _, df = compute_tf_df(corpus)
        ranked = rank_keywords(corpus, 1000)

        assert sorted(s.term for s in ranked) == sorted(df)
        assert all(s.df == df[s.term] for s in ranked)

    def test_sorted_descending(self, corpus):
        scores = [s.tfidf for s in rank_keywords(corpus, 1000)]
        assert scores == sorted(scores, reverse=True)

    def test_ties_break_alphabetically(self):
        ranked = rank_keywords([Article(id="d1", text="zeta alpha")], 10)
        assert [s.term for s in ranked] == ["alpha", "zeta"]

    def test_truncation_is_prefix(self, corpus):
        full = rank_keywords(corpus, 1000)
        top = rank_keywords(corpus, 3)

        assert len(top) == 3
        assert top == full[:3]

    def test_max_terms_zero(self, corpus):
        assert rank_keywords(corpus, 0) == []

    def test_negative_max_terms(self, corpus):
        assert rank_keywords(corpus, -5) == []

    def test_empty_corpus(self):
        assert rank_keywords([], 200) == []

    def test_idempotent(self, corpus):
        assert rank_keywords(corpus, 50) == rank_keywords(corpus, 50)

    def test_accepts_precomputed_maps(self, corpus):
        tf_df = compute_tf_df(corpus)
        assert rank_keywords(corpus, 50, tf_df=tf_df) == rank_keywords(corpus, 50)

    def test_accepts_dicts(self):
        ranked = rank_keywords([{"id": "d1", "title": "Bone", "text": "bone density"}], 10)
        assert [s.term for s in ranked] == ["bone", "density"]


class TestFilterRanked:
    def test_substring_match(self, corpus):
        ranked = rank_keywords(corpus, 1000)
        assert {s.term for s in filter_ranked(ranked, "GRAV")} == {"gravity", "microgravity"}

    def test_blank_query_keeps_everything(self, corpus):
        ranked = rank_keywords(corpus, 1000)
        assert filter_ranked(ranked, "  ") == ranked
        assert filter_ranked(ranked, None) == ranked


class TestHistogramData:
    def test_counts_are_document_frequencies(self):
        ranked = [
            KeywordStat(term="bone", df=1, tfidf=9.0),
            KeywordStat(term="gravity", df=3, tfidf=5.0),
            KeywordStat(term="mice", df=2, tfidf=4.0),
        ]
        assert histogram_data(ranked) == [
            {"term": "gravity", "count": 3},
            {"term": "mice", "count": 2},
            {"term": "bone", "count": 1},
        ]

    def test_limited_to_top_terms(self):
        ranked = [KeywordStat(term=f"t{i:02d}", df=1, tfidf=float(100 - i)) for i in range(30)]
        assert len(histogram_data(ranked)) == 20
        assert len(histogram_data(ranked, limit=5)) == 5


class TestRankKeywordsIds:
    def test_article_without_id_is_ranked_once(self):
        ranked = rank_keywords([{"id": "a1", "text": "alpha"}, {"text": "beta"}], 10)

        assert [s.term for s in ranked] == ["alpha", "beta"]
        assert ranked[0].tfidf == pytest.approx(ranked[1].tfidf)
        assert ranked[0].tfidf == pytest.approx(idf(1, 2))
