"""QuickSearch token index for fast approximate name matching.

Scoring every query against every name in a large population is too slow
for record linkage. QuickSearch builds an inverted index from tokens to the
identifiers of the entries containing them, and only scores the entries
that share at least one token with the query.

Warning:
    An entry that shares no token with the query is never scored, however
    similar the two strings are. "Smith" will not find "Smyth".

The index is immutable once built. It can be shared between threads
without locking.
"""

import logging
from collections import defaultdict
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Dict,
    FrozenSet,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Union,
)

import polars as pl

from quicksearch import search
from quicksearch.exceptions import ValidationError
from quicksearch.models import Entry, ScoredMatch, Scorer, Tokenizer
from quicksearch.tokens import tokenize

if TYPE_CHECKING:
    from quicksearch.enums import Algorithm

logger = logging.getLogger(__name__)


class QuickSearch:
    """
    A read-only token index over a collection of named entries.

    Each entry is a (name, uid) pair. The uid can be any hashable value and
    should identify one logical record; the index does not check that uids
    are unique.

    The tokenizer given at build time is stored on the index and reused for
    every query, so entries and queries are always tokenized the same way.

    Example:
        >>> from quicksearch import QuickSearch
        >>>
        >>> qs = QuickSearch([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
        >>> qs.candidates("Meg Muller")
        frozenset({1})
        >>> qs.top_n(1, "jaro_winkler", "Rep. Meg Muller")
        [ScoredMatch(score=97, entry=Entry(name='Rep. Meg Mueller', uid=1))]
        >>> qs.within_threshold(90, "damerau_levenshtein", "Towana Jacobs")
        [ScoredMatch(score=92, entry=Entry(name='Twana Jacobs', uid=2))]
    """

    def __init__(
        self,
        entries: Iterable[Tuple[str, Hashable]],
        tokenizer: Tokenizer = tokenize,
    ):
        """
        Build the index from (name, uid) pairs.

        Args:
            entries: Names to index, each paired with its record identifier
            tokenizer: Function splitting a name into tokens. Defaults to
                quicksearch.tokens.tokenize
        """
        self._entries = tuple(Entry(name, uid) for name, uid in entries)
        self._tokenizer = tokenizer
        self._token_filter, self._token_positions = self._build_index()

    def _build_index(
        self,
    ) -> Tuple[Mapping[str, FrozenSet[Hashable]], Mapping[str, FrozenSet[int]]]:
        """Build the token -> uids and token -> entry positions maps."""
        buckets: Dict[str, Set[Hashable]] = defaultdict(set)
        positions: Dict[str, Set[int]] = defaultdict(set)
        unreachable = 0

        for position, (name, uid) in enumerate(self._entries):
            tokens = set(self._tokenizer(name))
            if not tokens:
                unreachable += 1
            for token in tokens:
                buckets[token].add(uid)
                positions[token].add(position)

        logger.debug(
            "Built token index: %d entries, %d tokens, %d unreachable",
            len(self._entries),
            len(buckets),
            unreachable,
        )
        token_filter = MappingProxyType({t: frozenset(u) for t, u in buckets.items()})
        return token_filter, MappingProxyType({t: frozenset(p) for t, p in positions.items()})

    @classmethod
    def from_series(
        cls,
        names: "pl.Series",
        uids: Optional["pl.Series"] = None,
        tokenizer: Tokenizer = tokenize,
    ) -> "QuickSearch":
        """
        Create a QuickSearch from a Polars Series of names.

        Args:
            names: Series of names to index. Nulls are indexed as empty names
                and can never be matched
            uids: Series of identifiers aligned with names. Defaults to the
                row position of each name
            tokenizer: Function splitting a name into tokens

        Returns:
            QuickSearch instance

        Raises:
            ValidationError: If names and uids have different lengths

        Example:
            >>> names = pl.Series(["Rep. Meg Mueller", "Twana Jacobs"])
            >>> qs = QuickSearch.from_series(names)
            >>> qs.entries
            (Entry(name='Rep. Meg Mueller', uid=0), Entry(name='Twana Jacobs', uid=1))
        """
        name_list = [str(x) if x is not None else "" for x in names.to_list()]
        if uids is None:
            uid_list = list(range(len(name_list)))
        else:
            uid_list = uids.to_list()
            if len(uid_list) != len(name_list):
                raise ValidationError(
                    f"names and uids must have the same length, got {len(name_list)} and {len(uid_list)}"
                )
        return cls(zip(name_list, uid_list), tokenizer=tokenizer)

    @classmethod
    def from_dataframe(
        cls,
        df: "pl.DataFrame",
        name_column: str,
        uid_column: Optional[str] = None,
        tokenizer: Tokenizer = tokenize,
    ) -> "QuickSearch":
        """
        Create a QuickSearch from DataFrame columns.

        Args:
            df: Polars DataFrame
            name_column: Column holding the names to index
            uid_column: Column holding record identifiers. Defaults to the
                row position
            tokenizer: Function splitting a name into tokens

        Returns:
            QuickSearch instance

        Raises:
            ValidationError: If a column is missing from df
        """
        for column in (name_column, uid_column):
            if column is not None and column not in df.columns:
                raise ValidationError(f"Column '{column}' not found in DataFrame")
        uids = df[uid_column] if uid_column is not None else None
        return cls.from_series(df[name_column], uids, tokenizer=tokenizer)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """The indexed entries, in the order they were given."""
        return self._entries

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def token_filter(self) -> Mapping[str, FrozenSet[Hashable]]:
        """Read-only mapping of each token to the uids whose names contain it."""
        return self._token_filter

    def tokens(self) -> Iterator[str]:
        return iter(self._token_filter)

    def candidates(self, query: str) -> FrozenSet[Hashable]:
        """
        Return the uids of all entries sharing at least one token with query.

        Query tokens missing from the index contribute nothing. A query with
        no tokens, or none in common with the index, has no candidates.

        Args:
            query: Name to search for

        Returns:
            Frozenset of candidate uids
        """
        found: Set[Hashable] = set()
        for token in set(self._tokenizer(query)):
            found.update(self._token_filter.get(token, ()))
        return frozenset(found)

    def candidate_entries(self, query: str) -> List[Entry]:
        """
        Return the candidate entries for query, in original collection order.

        Only entries whose own name shares a token with query are returned.
        An entry is not pulled in because another entry has the same uid.
        """
        found: Set[int] = set()
        for token in set(self._tokenizer(query)):
            found.update(self._token_positions.get(token, ()))
        return [self._entries[p] for p in sorted(found)]

    def rank(
        self, query: str, scorer: Union[str, "Algorithm", Scorer]
    ) -> List[ScoredMatch]:
        """Score every candidate against query, best first. See search.rank."""
        return search.rank(self, query, scorer)

    def top_n(
        self, n: int, scorer: Union[str, "Algorithm", Scorer], query: str
    ) -> List[ScoredMatch]:
        """Return the n best matches for query. See search.top_n."""
        return search.top_n(self, n, scorer, query)

    def within_threshold(
        self, cutoff: int, scorer: Union[str, "Algorithm", Scorer], query: str
    ) -> List[ScoredMatch]:
        """Return all matches scoring at least cutoff. See search.within_threshold."""
        return search.within_threshold(self, cutoff, scorer, query)

    def __len__(self) -> int:
        """Return the number of indexed entries."""
        return len(self._entries)

    def __repr__(self) -> str:
        return f"QuickSearch(size={len(self._entries)}, tokens={len(self._token_filter)})"


def build(
    entries: Iterable[Tuple[str, Hashable]],
    tokenizer: Tokenizer = tokenize,
) -> QuickSearch:
    """Build a QuickSearch index from (name, uid) pairs.

    Example:
        >>> qs = build([("Rep. Meg Mueller", 1), ("Twana Jacobs", 2)])
        >>> len(qs)
        2
    """
    return QuickSearch(entries, tokenizer=tokenizer)


__all__ = ["QuickSearch", "build"]
