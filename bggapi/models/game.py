"""Board game data models returned from the "thing" endpoint."""

from dataclasses import dataclass
from typing import Protocol

from ..utils import bgg_url, get_sort_string


@dataclass(frozen=True)
class PollResult:
    """A single answer in a user poll."""
    value: str
    num_votes: int
    level: int | None = None  # Only seen in the language dependence poll


class Poll(Protocol):
    """Capability shared by the three poll shapes."""

    @property
    def total_votes(self) -> int: ...

    def all_results(self) -> list[PollResult]: ...


@dataclass(frozen=True)
class SuggestedPlayersPoll:
    """User poll for the best and recommended player counts.

    Results are keyed by the raw player count label, because the site uses
    labels such as "4+" that are not integers.
    """
    total_votes: int
    results: dict[str, list[PollResult]] | None = None

    def all_results(self) -> list[PollResult]:
        if not self.results:
            return []
        return [result for group in self.results.values() for result in group]


@dataclass(frozen=True)
class SuggestedPlayerAgePoll:
    """User poll for the suggested minimum player age."""
    total_votes: int
    results: list[PollResult] | None = None

    def all_results(self) -> list[PollResult]:
        return list(self.results or [])


@dataclass(frozen=True)
class LanguageDependencePoll:
    """User poll for how much in-game text a game relies on."""
    total_votes: int
    results: list[PollResult] | None = None

    def all_results(self) -> list[PollResult]:
        return list(self.results or [])


@dataclass(frozen=True)
class Rank:
    """A game's position in one of the site's ranking lists."""
    type: str  # "subtype" or "family"
    id: int
    name: str
    friendly_name: str
    value: int  # 0 when unranked
    bayes_average: float


@dataclass(frozen=True)
class Link:
    """A link from a game to a designer, publisher, mechanic, expansion, etc."""
    type: str
    id: int
    value: str
    inbound: bool | None = None


@dataclass(frozen=True)
class Statistics:
    """Site statistics for a game, present when requested with stats."""
    users_rated: int
    average: float
    bayes_average: float
    std_dev: float
    median: float
    owned: int
    trading: int
    wanting: int
    wishing: int
    num_comments: int
    num_weights: int
    average_weight: float
    ranks: list[Rank]


@dataclass(frozen=True)
class Game:
    """A board game (or expansion, accessory...) from an item lookup."""
    object_id: int
    type: str
    name: str
    sort_index: int
    description: str
    year_published: int
    min_players: int
    max_players: int
    playing_time: int
    min_playtime: int
    max_playtime: int
    min_age: int
    suggested_players: SuggestedPlayersPoll
    suggested_player_age: SuggestedPlayerAgePoll
    language_dependence: LanguageDependencePoll
    links: list[Link]
    image_path: str | None = None
    thumbnail_path: str | None = None
    stats: Statistics | None = None

    @property
    def sort_name(self) -> str:
        """Name to sort on, e.g. "Gallerist" for "The Gallerist" with sort index 5."""
        return get_sort_string(self.name, self.sort_index)

    @property
    def image_url(self) -> str | None:
        return bgg_url(self.image_path)

    @property
    def thumbnail_url(self) -> str | None:
        return bgg_url(self.thumbnail_path)
