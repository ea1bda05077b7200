"""Ranking and result selection over a QuickSearch index.

A query is answered in three steps:

1. the index narrows the population to entries sharing a token with the query;
2. ``rank()`` scores those candidates and sorts them best first;
3. a selector keeps part of the ranked list, either the first ``n``
   (``top_n()``) or every match scoring at least a cutoff
   (``within_threshold()``).

Scores are integer percents in [0, 100], truncated from the scorer's
[0, 1] similarity. Matches with equal scores keep the order in which their
entries were given to the index, so results are reproducible.

Example usage:
    >>> from quicksearch import build, search
    >>> qs = build([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
    >>> search.top_n(qs, 1, "jaro_winkler", "Rep. Meg Muller")
    [ScoredMatch(score=97, entry=Entry(name='Rep. Meg Mueller', uid=1))]
    >>> search.within_threshold(qs, 90, "damerau_levenshtein", "Towana Jacobs")
    [ScoredMatch(score=92, entry=Entry(name='Twana Jacobs', uid=2))]
"""

from __future__ import annotations

from itertools import takewhile
from typing import TYPE_CHECKING

from quicksearch._utils import resolve_scorer
from quicksearch.models import ScoredMatch, Scorer
from quicksearch.scorers import to_percent

if TYPE_CHECKING:
    from quicksearch.enums import Algorithm
    from quicksearch.index import QuickSearch

__all__ = ["score", "rank", "first_n", "at_least", "top_n", "within_threshold"]


def score(a: str, b: str, scorer: str | Algorithm | Scorer = "jaro_winkler") -> int:
    """Compute the percent similarity of two strings.

    Args:
        a: First string.
        b: Second string.
        scorer: Scoring function, Algorithm enum or algorithm name.

    Returns:
        The scorer's similarity multiplied by 100 and floored.

    Example:
        >>> score("Towana Jacobs", "Twana Jacobs", "damerau_levenshtein")
        92
    """
    return to_percent(resolve_scorer(scorer)(a, b))


def rank(
    index: QuickSearch,
    query: str,
    scorer: str | Algorithm | Scorer,
) -> list[ScoredMatch]:
    """Score every candidate entry against the query, best first.

    Only entries sharing at least one token with the query are scored.
    The sort is stable: entries with equal scores stay in the order they
    were given to the index. Identical names or scores are not collapsed.

    Args:
        index: The QuickSearch index to search.
        query: The name to search for.
        scorer: Scoring function, Algorithm enum or algorithm name.

    Returns:
        List of ScoredMatch sorted by score descending. Empty if the query
        shares no token with the index.
    """
    score_fn = resolve_scorer(scorer)
    scored = [
        ScoredMatch(to_percent(score_fn(query, entry.name)), entry)
        for entry in index.candidate_entries(query)
    ]
    # reverse=True keeps equal scores in their original order
    scored.sort(key=lambda m: m.score, reverse=True)
    return scored


def first_n(ranked: list[ScoredMatch], n: int) -> list[ScoredMatch]:
    """Keep the first n matches of a ranked list. Zero or negative n keeps none."""
    return ranked[:n] if n > 0 else []


def at_least(ranked: list[ScoredMatch], cutoff: int) -> list[ScoredMatch]:
    """Keep the leading matches of a ranked list whose score is >= cutoff."""
    return list(takewhile(lambda m: m.score >= cutoff, ranked))


def top_n(
    index: QuickSearch,
    n: int,
    scorer: str | Algorithm | Scorer,
    query: str,
) -> list[ScoredMatch]:
    """Return the n best matches for the query.

    Args:
        index: The QuickSearch index to search.
        n: Maximum number of matches. Zero or negative returns an empty list.
        scorer: Scoring function, Algorithm enum or algorithm name.
        query: The name to search for.

    Returns:
        Up to n ScoredMatch objects, best first.

    Example:
        >>> qs = build([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
        >>> top_n(qs, 5, "exact", "Twana Jacobs")
        [ScoredMatch(score=100, entry=Entry(name='Twana Jacobs', uid=2))]
    """
    if n <= 0:
        return []
    return first_n(rank(index, query, scorer), n)


def within_threshold(
    index: QuickSearch,
    cutoff: int,
    scorer: str | Algorithm | Scorer,
    query: str,
) -> list[ScoredMatch]:
    """Return every match whose score is greater than or equal to cutoff.

    The comparison is inclusive: a match scoring exactly ``cutoff`` is
    returned. Scanning stops at the first match below the cutoff, which is
    correct because the ranked list is sorted best first.

    Args:
        index: The QuickSearch index to search.
        cutoff: Minimum percent score, 0 to 100.
        scorer: Scoring function, Algorithm enum or algorithm name.
        query: The name to search for.

    Returns:
        ScoredMatch objects with score >= cutoff, best first.
    """
    return at_least(rank(index, query, scorer), cutoff)
