"""Exception hierarchy for fuzzyrank.

Matching itself never raises: a candidate that does not match, or an empty
query or candidate, simply yields ``None``. Exceptions are reserved for
invalid arguments and for canceled asynchronous runs.
"""


class FuzzyRankError(Exception):
    """Base class for all fuzzyrank errors."""


class ValidationError(FuzzyRankError, ValueError):
    """Raised when an option or argument is invalid."""


class CanceledError(FuzzyRankError):
    """Raised when awaiting a ``go_async`` run that was canceled."""


__all__ = ["FuzzyRankError", "ValidationError", "CanceledError"]
