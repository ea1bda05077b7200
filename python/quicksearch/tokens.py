"""Default tokenizer used to build and query the token index."""

from typing import FrozenSet


def _keep(char: str) -> bool:
    return char.isalnum() or char.isspace()


def tokenize(text: str) -> FrozenSet[str]:
    """Split a name into its set of normalized tokens.

    Text is case-folded, characters that are neither alphanumeric nor
    whitespace are deleted, and the remainder is split on whitespace.

    Args:
        text: The name to tokenize.

    Returns:
        Frozenset of non-empty tokens. Empty for empty, whitespace-only
        or punctuation-only text.

    Example:
        >>> sorted(tokenize("Rep. Meg Mueller"))
        ['meg', 'mueller', 'rep']
        >>> sorted(tokenize("O'Brien, Jr."))
        ['jr', 'obrien']
    """
    cleaned = "".join(c for c in text.casefold() if _keep(c))
    return frozenset(cleaned.split())


__all__ = ["tokenize"]
