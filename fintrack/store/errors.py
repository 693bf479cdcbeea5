"""Store error types.

Reads and writes fail with distinct exceptions so callers can report which
side of the store went wrong. Both chain the underlying sqlite3.Error.
"""


class StoreError(Exception):
    """Base class for transaction store failures."""


class FetchFailedError(StoreError):
    """Reading transactions from the store failed."""


class WriteFailedError(StoreError):
    """Adding or deleting a transaction failed."""
