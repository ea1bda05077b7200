"""Exceptions raised by quicksearch."""


class QuickSearchError(Exception):
    """Base class for all quicksearch errors."""


class ValidationError(QuickSearchError, ValueError):
    """Invalid input, such as a missing DataFrame column."""


class ScorerError(QuickSearchError, ValueError):
    """Unknown scorer name."""


__all__ = ["QuickSearchError", "ValidationError", "ScorerError"]
