"""
Exceptions raised by palidict.

Only conditions a caller has to react to are exceptions. "No results" and
"word could not be split" are ordinary return values.
"""


class PalidictError(Exception):
    """Base class for all palidict errors."""
    pass


class MissingVolumeError(PalidictError, FileNotFoundError):
    """A dictionary volume file is absent, unreadable or not valid XML."""

    def __init__(self, source: str, index: int, reason: str = "not found"):
        self.source = source
        self.index = index
        self.reason = reason
        super().__init__(f"{source} volume {index}: {reason}")


class EntryNotFoundError(PalidictError, LookupError):
    """An entry ID does not resolve to an entry."""

    def __init__(self, source: str, entry_id: str):
        self.source = source
        self.entry_id = entry_id
        super().__init__(f"entry not found: {source} {entry_id}")


class EmptyQueryError(PalidictError, ValueError):
    """Raised when a query is empty or whitespace-only."""
    pass


class AnalysisTimeoutError(PalidictError):
    """Raised when async lookup times out."""
    pass
