"""Tests for batch processing functions.

This module tests running a retrieval function over many query entries,
sequentially and on a thread pool.
"""

import pytest

import quicksearch as qs
from quicksearch import batch, search
from fixtures.real_data import PERSON_ENTRIES, QUERY_EXPECTATIONS

ENTRIES = [("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)]
QUERIES = [("Rep. Meg Muller", "q1"), ("Towana Jacobs", "q2")]


class TestBatchProcessing:
    """Tests for batch, batch_top_n and batch_within_threshold."""

    def test_batch_top_n(self):
        index = qs.build(ENTRIES)
        results = qs.batch_apply(qs.top_n, index, 1, "jaro_winkler", QUERIES)
        assert len(results) == 2
        for (name, uid), result in zip(QUERIES, results):
            assert result.query == (name, uid)
            assert result.matches == qs.top_n(index, 1, "jaro_winkler", name)

    def test_batch_top_n_partial(self):
        index = qs.build(ENTRIES)
        assert batch.batch_top_n(index, 1, "jaro_winkler", QUERIES) == qs.batch_apply(
            search.top_n, index, 1, "jaro_winkler", QUERIES
        )

    def test_batch_within_threshold(self):
        index = qs.build(ENTRIES)
        results = qs.batch_within_threshold(index, 90, "damerau", QUERIES)
        assert results[1] == (("Towana Jacobs", "q2"), [(92, ("Twana Jacobs", 2))])

    def test_results_pair_query_with_matches(self):
        index = qs.build(ENTRIES)
        result = qs.batch_top_n(index, 1, "exact", [("Twana Jacobs", 7)])[0]
        assert isinstance(result, qs.BatchResult)
        assert isinstance(result.query, qs.Entry)
        query, matches = result
        assert query.uid == 7
        assert matches == [(100, ("Twana Jacobs", 2))]

    def test_preserves_query_order(self):
        index = qs.build(PERSON_ENTRIES)
        queries = [(name, i) for i, (name, _) in enumerate(QUERY_EXPECTATIONS)]
        results = qs.batch_top_n(index, 1, "jaro_winkler", queries)
        assert [r.query.uid for r in results] == list(range(len(queries)))

    def test_custom_retrieval(self):
        index = qs.build(ENTRIES)

        def uids_only(index, n, scorer, query):
            return [m.uid for m in index.top_n(n, scorer, query)]

        results = qs.batch_apply(uids_only, index, 5, "jaro", QUERIES)
        assert [r.matches for r in results] == [[1], [2]]

    def test_scorer_resolved_once(self):
        index = qs.build(ENTRIES)
        seen = []

        def retrieval(index, n, scorer, query):
            seen.append(scorer)
            return []

        qs.batch_apply(retrieval, index, 1, "jaro_winkler", QUERIES)
        assert seen == [qs.scorers.jaro_winkler, qs.scorers.jaro_winkler]


class TestBatchParallel:
    """Thread pool execution gives the same output as a sequential run."""

    @pytest.mark.parametrize("workers", [2, 4, 8])
    def test_parallel_matches_sequential(self, workers):
        index = qs.build(PERSON_ENTRIES)
        queries = [(name, i) for i, (name, _) in enumerate(QUERY_EXPECTATIONS * 10)]
        sequential = qs.batch_within_threshold(index, 0, "jaro_winkler", queries)
        parallel = qs.batch_within_threshold(
            index, 0, "jaro_winkler", queries, workers=workers
        )
        assert parallel == sequential

    def test_single_worker_is_sequential(self):
        index = qs.build(ENTRIES)
        assert qs.batch_top_n(index, 1, "jaro", QUERIES, workers=1) == qs.batch_top_n(
            index, 1, "jaro", QUERIES
        )

    def test_parallel_errors_propagate(self):
        index = qs.build(ENTRIES)

        def broken(a, b):
            raise RuntimeError("metric failed")

        with pytest.raises(RuntimeError, match="metric failed"):
            qs.batch_top_n(index, 1, broken, QUERIES, workers=2)


class TestBatchEdgeCases:
    """Edge case tests for batch operations."""

    def test_empty_queries(self):
        index = qs.build(ENTRIES)
        assert qs.batch_top_n(index, 1, "jaro_winkler", []) == []
        assert qs.batch_top_n(index, 1, "jaro_winkler", [], workers=4) == []

    def test_empty_index(self):
        results = qs.batch_top_n(qs.build([]), 3, "jaro_winkler", QUERIES)
        assert [r.matches for r in results] == [[], []]

    def test_query_without_tokens(self):
        results = qs.batch_top_n(qs.build(ENTRIES), 3, "jaro", [("", 1), ("...", 2)])
        assert [r.matches for r in results] == [[], []]

    def test_zero_n(self):
        results = qs.batch_top_n(qs.build(ENTRIES), 0, "jaro", QUERIES)
        assert all(r.matches == [] for r in results)

    def test_generator_queries(self):
        index = qs.build(ENTRIES)
        results = qs.batch_top_n(index, 1, "jaro", (q for q in QUERIES))
        assert len(results) == 2

    def test_unknown_scorer(self):
        with pytest.raises(qs.ScorerError):
            qs.batch_top_n(qs.build(ENTRIES), 1, "nope", QUERIES)
