"""
Concurrency tests for QuickSearch.

Tests cover:
- Thread safety documentation verification
- One shared index queried from many threads
- Parallel batch operations
"""

import concurrent.futures

import quicksearch as qs
from quicksearch import batch
from fixtures.real_data import PERSON_ENTRIES, QUERY_EXPECTATIONS


class TestThreadSafetyDocumentation:
    """Verify thread safety is documented."""

    def test_module_docstring(self):
        docstring = qs.index.__doc__ or ""
        assert "thread" in docstring.lower(), "Missing thread-safety note in index docstring"

    def test_batch_docstring(self):
        docstring = batch.__doc__ or ""
        assert "thread" in docstring.lower()


class TestSharedIndex:
    """A single index can be queried from many threads at once."""

    def test_concurrent_queries(self):
        index = qs.build(PERSON_ENTRIES)
        queries = [query for query, _ in QUERY_EXPECTATIONS] * 25
        expected = [index.top_n(3, "jaro_winkler", q) for q in queries]

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda q: index.top_n(3, "jaro_winkler", q), queries))

        assert results == expected

    def test_concurrent_queries_leave_index_unchanged(self):
        index = qs.build(PERSON_ENTRIES)
        before = {token: uids for token, uids in index.token_filter.items()}

        def worker(thread_id):
            for query, _ in QUERY_EXPECTATIONS:
                index.within_threshold(thread_id * 10, "jaro", query)
            return len(index)

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            sizes = list(executor.map(worker, range(8)))

        assert sizes == [len(PERSON_ENTRIES)] * 8
        assert dict(index.token_filter) == before

    def test_separate_indices_per_thread(self):
        def worker(thread_id):
            index = qs.build((f"item {thread_id} {i}", i) for i in range(100))
            return len(index.top_n(5, "jaro_winkler", f"item {thread_id} 50"))

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(worker, range(4)))

        assert results == [5, 5, 5, 5]


class TestParallelBatchOperations:
    """Batch queries on a thread pool keep each query's ranking intact."""

    def test_stable_ties_in_parallel(self):
        index = qs.build([(f"Smith {i}", i) for i in range(50)])
        queries = [("Smith", q) for q in range(20)]
        results = qs.batch_top_n(index, 50, lambda a, b: 0.5, queries, workers=8)
        for result in results:
            assert [m.uid for m in result.matches] == list(range(50))
