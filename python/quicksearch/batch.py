"""Batch operations API for QuickSearch.

This module runs one retrieval function, such as ``top_n`` or
``within_threshold``, independently over a list of query entries. Each query
only reads the shared index, so queries can be spread over a thread pool
with ``workers``; the output is identical to a sequential run.

Example usage:
    >>> from quicksearch import build, search
    >>> import quicksearch.batch as batch

    >>> qs = build([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
    >>> queries = [("Rep. Meg Muller", "a"), ("Towana Jacobs", "b")]

    # Best match for each query
    >>> for query, matches in batch.batch_top_n(qs, 1, "jaro_winkler", queries):
    ...     print(query.uid, [(m.score, m.uid) for m in matches])
    a [(97, 1)]
    b [(97, 2)]

    # Any retrieval function works, including your own
    >>> results = batch.batch_apply(search.within_threshold, qs, 90, "damerau", queries, workers=4)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import TYPE_CHECKING, Callable, Hashable, Iterable, Tuple

from quicksearch import search
from quicksearch._utils import resolve_scorer
from quicksearch.models import BatchResult, Entry, ScoredMatch, Scorer

if TYPE_CHECKING:
    from quicksearch.enums import Algorithm
    from quicksearch.index import QuickSearch

__all__ = [
    "Retrieval",
    "batch_apply",
    "batch_top_n",
    "batch_within_threshold",
]

logger = logging.getLogger(__name__)

Retrieval = Callable[["QuickSearch", int, Scorer, str], "list[ScoredMatch]"]
"""A retrieval function taking (index, param, scorer, query)."""


def batch_apply(
    retrieval: Retrieval,
    index: QuickSearch,
    param: int,
    scorer: str | Algorithm | Scorer,
    queries: Iterable[Tuple[str, Hashable]],
    workers: int | None = None,
) -> list[BatchResult]:
    """Apply a retrieval function to every query entry.

    Args:
        retrieval: Function called as ``retrieval(index, param, scorer, name)``
            for each query, e.g. ``search.top_n`` or ``search.within_threshold``.
        index: The QuickSearch index shared by all queries.
        param: Passed through to retrieval: n for top_n, the cutoff for
            within_threshold.
        scorer: Scoring function, Algorithm enum or algorithm name.
        queries: (name, uid) pairs to look up.
        workers: Number of threads. None or 1 runs the queries sequentially.

    Returns:
        List of BatchResult(query, matches), in the same order as queries.

    Raises:
        ScorerError: If scorer is an unknown algorithm name.
    """
    score_fn = resolve_scorer(scorer)
    query_entries = [Entry(name, uid) for name, uid in queries]

    def run(query: Entry) -> list[ScoredMatch]:
        return retrieval(index, param, score_fn, query.name)

    logger.debug(
        "Running %s over %d queries (workers=%s)",
        getattr(retrieval, "__name__", retrieval),
        len(query_entries),
        workers,
    )
    if workers is not None and workers > 1 and len(query_entries) > 1:
        # Executor.map yields results in submission order
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(run, query_entries))
    else:
        results = [run(query) for query in query_entries]

    return [BatchResult(query, matches) for query, matches in zip(query_entries, results)]


batch_top_n = partial(batch_apply, search.top_n)
batch_top_n.__doc__ = """Version of top_n that processes a list of (name, uid) query entries."""

batch_within_threshold = partial(batch_apply, search.within_threshold)
batch_within_threshold.__doc__ = (
    """Version of within_threshold that processes a list of (name, uid) query entries."""
)
