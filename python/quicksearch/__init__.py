"""
QuickSearch - Token-filtered fuzzy name matching

A Python library for record linkage: match short names against a large
reference population without scoring every pair. Names are indexed by their
tokens, and a query is only scored against entries sharing at least one
token with it.

Example usage:
    >>> import quicksearch as qs

    # Build an index of (name, uid) pairs once
    >>> index = qs.build([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])

    # Best match, scored with Jaro-Winkler (returns ScoredMatch objects)
    >>> index.top_n(1, "jaro_winkler", "Rep. Meg Muller")
    [ScoredMatch(score=97, entry=Entry(name='Rep. Meg Mueller', uid=1))]

    # Every match scoring at least 90 percent
    >>> index.within_threshold(90, qs.Algorithm.DAMERAU_LEVENSHTEIN, "Towana Jacobs")
    [ScoredMatch(score=92, entry=Entry(name='Twana Jacobs', uid=2))]

    # Many queries at once, on a thread pool
    >>> qs.batch_top_n(index, 1, "jaro_winkler", [("Towana Jacobs", "q1")], workers=4)
    [BatchResult(query=Entry(name='Towana Jacobs', uid='q1'), matches=[...])]
"""

import logging
from importlib.metadata import version as _get_version

from quicksearch import scorers
from quicksearch._utils import DEFAULT_SCORER, resolve_scorer
from quicksearch.batch import batch_apply, batch_top_n, batch_within_threshold
from quicksearch.enums import Algorithm
from quicksearch.exceptions import QuickSearchError, ScorerError, ValidationError
from quicksearch.index import QuickSearch, build
from quicksearch.models import BatchResult, Entry, ScoredMatch, Scorer, Tokenizer
from quicksearch.polars_ext import match_dataframe, match_series
from quicksearch.scorers import to_percent
from quicksearch.search import rank, score, top_n, within_threshold
from quicksearch.tokens import tokenize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = _get_version("quicksearch")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "QuickSearchError",
    "ValidationError",
    "ScorerError",
    # Data types
    "Entry",
    "ScoredMatch",
    "BatchResult",
    "Scorer",
    "Tokenizer",
    # Enums
    "Algorithm",
    # Index
    "QuickSearch",
    "build",
    "tokenize",
    # Scoring
    "scorers",
    "resolve_scorer",
    "DEFAULT_SCORER",
    "to_percent",
    "score",
    # Retrieval
    "rank",
    "top_n",
    "within_threshold",
    # Batch processing
    "batch_apply",
    "batch_top_n",
    "batch_within_threshold",
    # Polars Integration
    "match_series",
    "match_dataframe",
]
