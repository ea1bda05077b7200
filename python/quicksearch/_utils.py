"""Internal utilities for quicksearch."""

from typing import Union

from quicksearch.enums import Algorithm
from quicksearch.exceptions import ScorerError
from quicksearch.models import Scorer
from quicksearch.scorers import SCORERS

DEFAULT_SCORER = Algorithm.JARO_WINKLER


def resolve_scorer(scorer: Union[str, Algorithm, Scorer]) -> Scorer:
    """Turn a scorer name, Algorithm enum or callable into a scoring function.

    Args:
        scorer: An Algorithm enum value, a case-insensitive algorithm name,
            or any callable taking two strings and returning a float.

    Returns:
        The scoring function.

    Raises:
        ScorerError: If the algorithm name is not recognized.
        TypeError: If scorer is neither a string, an Algorithm nor callable.

    Example:
        >>> resolve_scorer(Algorithm.JARO_WINKLER).__name__
        'jaro_winkler'
        >>> resolve_scorer("Damerau").__name__
        'damerau_levenshtein'
    """
    # Algorithm is a str subclass, check it first
    if isinstance(scorer, Algorithm):
        return SCORERS[scorer]

    if isinstance(scorer, str):
        try:
            return SCORERS[Algorithm(scorer.lower())]
        except ValueError:
            raise ScorerError(
                f"Unknown scorer: '{scorer}'. "
                f"Valid options: {sorted(a.value for a in Algorithm)}"
            ) from None

    if callable(scorer):
        return scorer

    raise TypeError(
        f"scorer must be str, Algorithm enum or callable, got {type(scorer).__name__}"
    )


__all__ = ["resolve_scorer", "DEFAULT_SCORER"]
