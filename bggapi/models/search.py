"""Search result data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """A single hit from the search endpoint."""
    item_type: str
    object_id: int
    name_type: str  # "primary" or "alternate"
    name: str
    year_published: int | None = None
