"""Exception types raised by the search."""


class SearchError(RuntimeError):
    """Base class for fatal search errors."""


class InvariantViolation(SearchError):
    """A broken precondition: continuing would produce wrong results.

    Raised for distance-map lookup misses, malformed distance-map snapshots and
    malformed letter or word strings.
    """


class QueueError(SearchError):
    """The work queue service failed to accept or deliver a word."""
