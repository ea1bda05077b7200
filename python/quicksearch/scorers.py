"""Built-in similarity scorers and the percent conversion.

Every scorer takes two strings and returns a similarity in [0, 1], higher
meaning more similar. Any callable with that signature can be used in their
place; the built-ins are backed by RapidFuzz and jellyfish.

Example:
    >>> from quicksearch import scorers
    >>> scorers.damerau_levenshtein("Towana Jacobs", "Twana Jacobs")
    0.9230769230769231
    >>> scorers.to_percent(0.9230769230769231)
    92
"""

import math
from typing import Dict

import jellyfish
from rapidfuzz import fuzz
from rapidfuzz.distance import DamerauLevenshtein, Jaro, JaroWinkler, Levenshtein

from quicksearch.enums import Algorithm
from quicksearch.models import Scorer


def exact(a: str, b: str) -> float:
    """1.0 if the strings are identical, 0.0 otherwise."""
    return 1.0 if a == b else 0.0


def jaro(a: str, b: str) -> float:
    return Jaro.similarity(a, b)


def jaro_winkler(a: str, b: str) -> float:
    """Jaro-Winkler similarity with the standard 0.1 prefix weight."""
    return JaroWinkler.similarity(a, b)


def damerau_levenshtein(a: str, b: str) -> float:
    """1 - distance / max(len(a), len(b)), counting transpositions as one edit."""
    return DamerauLevenshtein.normalized_similarity(a, b)


def levenshtein(a: str, b: str) -> float:
    return Levenshtein.normalized_similarity(a, b)


def token_sort(a: str, b: str) -> float:
    # RapidFuzz ratios are on a 0-100 scale
    return fuzz.token_sort_ratio(a, b) / 100.0


def metaphone(a: str, b: str) -> float:
    """Jaro-Winkler similarity of the Metaphone encodings of both strings.

    Names that sound alike ("Smith", "Smyth") score 1.0 even though they are
    spelled differently.
    """
    return JaroWinkler.similarity(jellyfish.metaphone(a), jellyfish.metaphone(b))


SCORERS: Dict[Algorithm, Scorer] = {
    Algorithm.EXACT: exact,
    Algorithm.JARO: jaro,
    Algorithm.JARO_WINKLER: jaro_winkler,
    Algorithm.DAMERAU_LEVENSHTEIN: damerau_levenshtein,
    Algorithm.DAMERAU: damerau_levenshtein,
    Algorithm.LEVENSHTEIN: levenshtein,
    Algorithm.TOKEN_SORT: token_sort,
    Algorithm.METAPHONE: metaphone,
}


def to_percent(similarity: float) -> int:
    """Convert a [0, 1] similarity into an integer percent, truncating.

    The value is floored, never rounded: 0.999 becomes 99. Values outside
    [0, 1] are not clamped, so a scorer that breaks its range contract
    produces a percent outside [0, 100].

    Example:
        >>> to_percent(0.999)
        99
        >>> to_percent(1.0)
        100
    """
    return math.floor(similarity * 100)


__all__ = [
    "exact",
    "jaro",
    "jaro_winkler",
    "damerau_levenshtein",
    "levenshtein",
    "token_sort",
    "metaphone",
    "SCORERS",
    "to_percent",
]
