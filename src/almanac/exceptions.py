"""Custom exception hierarchy for Almanac.

Infrastructure failures (the external index) are absorbed by the search
service and degraded to local results; content failures surface once at
the tool/command boundary.
"""

from __future__ import annotations


class AlmanacError(Exception):
    """Base class for all Almanac exceptions."""


class ParsingError(AlmanacError):
    """Raised when an article fails to parse (e.g., malformed front matter)."""


class StorageError(AlmanacError):
    """Raised when the storage layer encounters an error."""


class SourceUnavailable(StorageError):
    """Raised when the content source (or a snapshot file) cannot be read."""


class SearchError(AlmanacError):
    """Raised for search indexing/query issues."""


class IndexUnavailable(SearchError):
    """Raised when the external index is unreachable, misconfigured or returns bad data."""


class StaleReference(SearchError):
    """A ranked identifier from the external index has no matching article."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"No article for indexed slug '{slug}'")
        self.slug = slug
