"""Data models for the BoardGameGeek XML API client."""

from .collection import CollectionEntry, CollectionRating, CollectionStats, CollectionStatus
from .config import ClientConfig
from .game import (
    Game,
    LanguageDependencePoll,
    Link,
    Poll,
    PollResult,
    Rank,
    Statistics,
    SuggestedPlayerAgePoll,
    SuggestedPlayersPoll,
)
from .result import ApiResult
from .search import SearchResult

__all__ = [
    "ApiResult",
    "ClientConfig",
    "CollectionEntry",
    "CollectionRating",
    "CollectionStats",
    "CollectionStatus",
    "Game",
    "LanguageDependencePoll",
    "Link",
    "Poll",
    "PollResult",
    "Rank",
    "SearchResult",
    "Statistics",
    "SuggestedPlayerAgePoll",
    "SuggestedPlayersPoll",
]
