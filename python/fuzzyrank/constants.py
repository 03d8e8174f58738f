"""Tuning constants for fuzzyrank.

The scoring constants are part of the ranking contract: changing them
changes the relative order of results.
"""

# Subtracted once when a transposition was needed to complete a match
TYPO_PENALTY = 20

# Scales the score of matches that never landed on word beginnings, so every
# such match ranks below every boundary-aligned one
NON_STRICT_MULTIPLIER = 1000

# Strings longer than this are prepared on every call instead of cached
MAX_CACHED_LENGTH = 999

# LRU capacity of the prepared-candidate and folded-query caches
PREPARED_CACHE_SIZE = 100_000
SEARCH_CACHE_SIZE = 10_000

# go_async checks the clock every ITEMS_PER_CHECK candidates and yields to
# the event loop once ASYNC_INTERVAL seconds have passed
ITEMS_PER_CHECK = 1000
ASYNC_INTERVAL = 0.010

__all__ = [
    "TYPO_PENALTY",
    "NON_STRICT_MULTIPLIER",
    "MAX_CACHED_LENGTH",
    "PREPARED_CACHE_SIZE",
    "SEARCH_CACHE_SIZE",
    "ITEMS_PER_CHECK",
    "ASYNC_INTERVAL",
]
