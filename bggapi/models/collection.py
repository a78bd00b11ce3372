"""Data models for games in a user's collection."""

from dataclasses import dataclass

from ..utils import bgg_url, get_sort_string
from .game import Rank


@dataclass(frozen=True)
class CollectionStatus:
    """Ownership and interest flags for a game in a collection."""
    owned: bool
    prev_owned: bool
    want_to_buy: bool
    want_to_play: bool
    preordered: bool
    want_in_trade: bool
    for_trade: bool
    wishlist: bool
    last_modified: str
    wishlist_priority: int | None = None  # Only meaningful when wishlist is set


@dataclass(frozen=True)
class CollectionRating:
    """Ratings block of a collection entry requested with stats."""
    average: float
    bayes_average: float
    user_rating: float | None = None  # None when the user has not rated ("N/A")
    users_rated: int | None = None
    std_dev: float | None = None
    median: float | None = None
    ranks: list[Rank] | None = None


@dataclass(frozen=True)
class CollectionStats:
    """Statistics block of a collection entry requested with stats."""
    num_owned: int
    rating: CollectionRating
    min_players: int | None = None
    max_players: int | None = None
    min_playtime: int | None = None
    max_playtime: int | None = None
    playing_time: int | None = None


@dataclass(frozen=True)
class CollectionEntry:
    """A game as it appears in a user's collection.

    Only the identifiers, name and status are guaranteed. The rest depends on
    what the site chose to send for the "brief" and "stats" flags.
    """
    object_id: int
    name: str
    sort_index: int
    collection_id: int
    status: CollectionStatus
    stats: CollectionStats | None = None
    year_published: int | None = None
    image_path: str | None = None
    thumbnail_path: str | None = None
    num_plays: int | None = None
    wishlist_comment: str | None = None
    comment: str | None = None

    @property
    def sort_name(self) -> str:
        return get_sort_string(self.name, self.sort_index)

    @property
    def image_url(self) -> str | None:
        return bgg_url(self.image_path)

    @property
    def thumbnail_url(self) -> str | None:
        return bgg_url(self.thumbnail_path)
