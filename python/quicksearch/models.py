"""Result and entry types shared across quicksearch."""

from typing import Callable, Hashable, Iterable, List, NamedTuple

Scorer = Callable[[str, str], float]
"""Similarity function returning a value in [0, 1], higher is more similar."""

Tokenizer = Callable[[str], Iterable[str]]
"""Splits a name into the tokens used for index lookups."""


class Entry(NamedTuple):
    """A name and the identifier of the record it belongs to."""

    name: str
    uid: Hashable


class ScoredMatch(NamedTuple):
    """An indexed entry paired with its percent similarity to a query."""

    score: int
    entry: Entry

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def uid(self) -> Hashable:
        return self.entry.uid


class BatchResult(NamedTuple):
    """A query entry and the matches retrieved for it."""

    query: Entry
    matches: List[ScoredMatch]


__all__ = ["Scorer", "Tokenizer", "Entry", "ScoredMatch", "BatchResult"]
