"""Enums for quicksearch API."""

from enum import Enum


class Algorithm(str, Enum):
    """Built-in similarity scorers.

    This enum provides type-safe scorer selection for search operations.
    String values are accepted anywhere an Algorithm is.

    Example:
        >>> from quicksearch import Algorithm, build
        >>> qs = build([("Twana Jacobs", 2)])
        >>> qs.top_n(1, Algorithm.DAMERAU_LEVENSHTEIN, "Towana Jacobs")
        [ScoredMatch(score=92, entry=Entry(name='Twana Jacobs', uid=2))]
    """

    EXACT = "exact"
    """1.0 for identical strings, 0.0 otherwise"""

    JARO = "jaro"
    """Jaro similarity, good for short strings"""

    JARO_WINKLER = "jaro_winkler"
    """Jaro-Winkler similarity with prefix weighting, excellent for names"""

    DAMERAU_LEVENSHTEIN = "damerau_levenshtein"
    """Normalized edit distance including transpositions"""

    DAMERAU = "damerau"
    """Alias for DAMERAU_LEVENSHTEIN"""

    LEVENSHTEIN = "levenshtein"
    """Normalized classic edit distance"""

    TOKEN_SORT = "token_sort"
    """Indel ratio after sorting words, ignores word order"""

    METAPHONE = "metaphone"
    """Jaro-Winkler over Metaphone codes, matches names that sound alike"""


__all__ = ["Algorithm"]
