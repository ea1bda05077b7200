"""Polars DataFrame operations for QuickSearch.

This module matches a whole column of query names against a QuickSearch
index and returns the matches as a long-format DataFrame, one row per
(query, match) pair. It is the DataFrame counterpart of
``quicksearch.batch``.

Selecting Matches
-----------------
Each function takes ``limit`` and ``min_score``:

- ``limit=N``: keep the N best matches per query (``top_n``)
- ``min_score=C``: keep matches scoring at least C (``within_threshold``)
- both: apply the cutoff, then keep at most N
- ``limit=None`` and ``min_score=None``: keep every ranked candidate

Example Usage
-------------
>>> import polars as pl
>>> from quicksearch import QuickSearch, match_dataframe
>>>
>>> people = pl.DataFrame({"name": ["Rep. Meg Mueller", "Twana Jacobs"], "id": [1, 2]})
>>> qs = QuickSearch.from_dataframe(people, "name", "id")
>>>
>>> claims = pl.DataFrame({"claimant": ["Towana Jacobs"], "claim_id": ["c-17"]})
>>> match_dataframe(qs, claims, "claimant", "claim_id", scorer="damerau", min_score=90)
shape: (1, 6)
...
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

import polars as pl

from quicksearch._utils import DEFAULT_SCORER, resolve_scorer
from quicksearch.enums import Algorithm
from quicksearch.exceptions import ValidationError
from quicksearch.models import ScoredMatch, Scorer
from quicksearch.search import at_least, first_n, rank

if TYPE_CHECKING:
    from quicksearch.index import QuickSearch

logger = logging.getLogger(__name__)


def _select(
    ranked: List[ScoredMatch], limit: Optional[int], min_score: Optional[int]
) -> List[ScoredMatch]:
    """Apply the threshold then the top-N selector to a ranked list."""
    if min_score is not None:
        ranked = at_least(ranked, min_score)
    if limit is not None:
        ranked = first_n(ranked, limit)
    return ranked


def _uid_series(name: str, uids: List[Hashable]) -> "pl.Series":
    """Build a uid column, keeping uids Polars cannot represent as Objects.

    Mixed-type tuples fail inference, and homogeneous tuples come back as
    lists, so any uid that does not round-trip is stored with pl.Object.
    """
    try:
        series = pl.Series(name, uids, strict=True)
    except (TypeError, ValueError, pl.exceptions.PolarsError):
        return pl.Series(name, uids, dtype=pl.Object)
    if series.to_list() != uids:
        return pl.Series(name, uids, dtype=pl.Object)
    return series


def _uid_dtype(index: "QuickSearch") -> pl.DataType:
    """Polars dtype of the index uids, used for empty result schemas."""
    if not index.entries:
        return pl.Null
    return _uid_series("match_uid", [index.entries[0].uid]).dtype


def _match_rows(
    index: "QuickSearch",
    queries: List[Any],
    scorer: Scorer,
    limit: Optional[int],
    min_score: Optional[int],
) -> Tuple[List[Dict[str, Any]], List[Hashable]]:
    """Return one row per (query, match) pair and the matched uids alongside."""
    rows = []
    uids = []
    for query_idx, query in enumerate(queries):
        if query is None:
            continue
        matches = _select(rank(index, str(query), scorer), limit, min_score)
        for position, match in enumerate(matches, start=1):
            rows.append(
                {
                    "query_idx": query_idx,
                    "query": str(query),
                    "rank": position,
                    "score": match.score,
                    "match": match.name,
                }
            )
            uids.append(match.uid)
    return rows, uids


def match_series(
    index: "QuickSearch",
    queries: "pl.Series",
    scorer: Union[str, Algorithm, Scorer] = DEFAULT_SCORER,
    limit: Optional[int] = 1,
    min_score: Optional[int] = None,
    include_query: bool = True,
) -> "pl.DataFrame":
    """
    Match each name in a Series against the index.

    Args:
        index: QuickSearch index to search
        queries: Series of query names. Nulls are skipped
        scorer: Scoring function, Algorithm enum or algorithm name
        limit: Maximum matches per query (default: 1 for best match only).
            None keeps all matches
        min_score: Minimum percent score (inclusive). None disables the cutoff
        include_query: Include query column in results

    Returns:
        DataFrame with columns:
        - query_idx: Position of the query in the input Series
        - query: The query name (if include_query=True)
        - rank: 1-based position of the match in the query's ranked list
        - score: Percent similarity, 0 to 100
        - match: The matched name from the index
        - match_uid: The uid of the matched entry

    Example:
        >>> qs = QuickSearch([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
        >>> match_series(qs, pl.Series(["Rep. Meg Muller", "Nobody"]))
        shape: (1, 6)
        ...
    """
    score_fn = resolve_scorer(scorer)
    rows, uids = _match_rows(index, queries.to_list(), score_fn, limit, min_score)
    logger.debug("Matched %d queries into %d rows", len(queries), len(rows))

    if not rows:
        schema = {
            "query_idx": pl.Int64,
            "query": pl.Utf8,
            "rank": pl.Int64,
            "score": pl.Int64,
            "match": pl.Utf8,
            "match_uid": _uid_dtype(index),
        }
        df = pl.DataFrame(schema=schema)
    else:
        df = pl.DataFrame(rows).with_columns(_uid_series("match_uid", uids))

    if include_query:
        return df.select(["query_idx", "query", "rank", "score", "match", "match_uid"])
    return df.select(["query_idx", "rank", "score", "match", "match_uid"])


def match_dataframe(
    index: "QuickSearch",
    df: "pl.DataFrame",
    name_column: str,
    uid_column: Optional[str] = None,
    scorer: Union[str, Algorithm, Scorer] = DEFAULT_SCORER,
    limit: Optional[int] = 1,
    min_score: Optional[int] = None,
) -> "pl.DataFrame":
    """
    Match each row of a DataFrame against the index by its name column.

    Args:
        index: QuickSearch index to search
        df: DataFrame of query records
        name_column: Column holding the query names
        uid_column: Column identifying each query record. Defaults to the
            row position
        scorer: Scoring function, Algorithm enum or algorithm name
        limit: Maximum matches per query (default: 1). None keeps all matches
        min_score: Minimum percent score (inclusive). None disables the cutoff

    Returns:
        DataFrame with columns: query_uid, query, rank, score, match, match_uid

    Raises:
        ValidationError: If a column is missing from df
    """
    for column in (name_column, uid_column):
        if column is not None and column not in df.columns:
            raise ValidationError(f"Column '{column}' not found in DataFrame")

    matched = match_series(
        index, df[name_column], scorer=scorer, limit=limit, min_score=min_score
    )
    if uid_column is None:
        query_uids: List[Hashable] = list(range(df.height))
        uid_dtype = pl.Int64
    else:
        query_uids = df[uid_column].to_list()
        uid_dtype = df[uid_column].dtype

    query_uid = pl.Series(
        "query_uid",
        [query_uids[i] for i in matched["query_idx"].to_list()],
        dtype=uid_dtype,
    )
    return matched.with_columns(query_uid).select(
        ["query_uid", "query", "rank", "score", "match", "match_uid"]
    )


__all__ = ["match_series", "match_dataframe"]
