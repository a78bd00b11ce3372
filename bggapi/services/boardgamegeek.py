"""Public entry point for the BoardGameGeek XML API."""

from collections.abc import Iterable
from typing import Any

import httpx
import structlog

from ..models import ClientConfig, CollectionEntry, Game, SearchResult
from .api_adapter import ApiAdapter
from .deserializers import deserialize_collection_entry, deserialize_game, deserialize_search_result
from .errors import ApiError
from .http_client import HttpClientService
from .scheduling import AsyncioScheduler, CancellationToken, Scheduler

log = structlog.stdlib.get_logger()


def _flag(value: bool) -> str:
    return "1" if value else "0"


class BoardGameGeek:
    """Client for the collection, thing and search endpoints.

    Every operation either returns its records or raises exactly one
    ``BggError``. Use it as an async context manager, or call ``close()``
    when done, so the underlying connection pool is released.

    Example:
        async with BoardGameGeek() as bgg:
            games = await bgg.get_games_by_id([161936, 84876], stats=True)
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: HttpClientService | None = None,
        scheduler: Scheduler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client settings, defaults when omitted
            http_client: Pre-built HTTP client; one is created from ``config`` otherwise
            scheduler: Clock and timer for collection retries
            transport: Optional httpx transport for the created HTTP client
        """
        self.config: ClientConfig = config or ClientConfig()
        self.http_client: HttpClientService = http_client or HttpClientService(
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
            verify_ssl=self.config.verify_ssl,
            transport=transport,
        )
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self.adapter: ApiAdapter = ApiAdapter(
            self.http_client,
            scheduler=self.scheduler,
            retry_delay=self.config.retry_delay,
        )
        self.base_url: str = self.config.base_url.rstrip("/")

        log.debug("BoardGameGeek client initialized", base_url=self.base_url)

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}/collection"

    @property
    def thing_url(self) -> str:
        return f"{self.base_url}/thing"

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/search"

    async def get_user_collection(
        self,
        username: str,
        brief: bool = False,
        stats: bool = False,
        timeout_seconds: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> list[CollectionEntry]:
        """Fetch a user's collection.

        The server may answer "not ready" while it builds the collection.
        Such answers are retried until ``timeout_seconds`` (or the configured
        collection timeout) have passed since the call started.

        Args:
            username: The BoardGameGeek user name
            brief: Ask for the abbreviated form of each entry
            stats: Include per-entry statistics
            timeout_seconds: Overall retry budget in seconds
            cancel_token: Stops retrying when cancelled

        Returns:
            The collection entries in document order
        """
        timeout = self.config.collection_timeout if timeout_seconds is None else timeout_seconds
        retry_until = self.scheduler.now() + timeout
        params = {
            "username": username,
            "brief": _flag(brief),
            "stats": _flag(stats),
        }

        log.info("Fetching user collection", username=username, brief=brief, stats=stats, timeout=timeout)
        return await self.adapter.request(
            self.collection_url,
            params,
            root_element="items",
            child_element="item",
            deserialize=deserialize_collection_entry,
            retry_until=retry_until,
            cancel_token=cancel_token,
        )

    async def get_games_by_id(self, ids: Iterable[int], stats: bool = False) -> list[Game]:
        """Fetch several games in one request, in the order the server returns them."""
        ids = list(ids)
        params = {
            "id": ",".join(str(game_id) for game_id in ids),
            "stats": _flag(stats),
        }

        log.info("Fetching games", ids=ids, stats=stats)
        return await self.adapter.request(
            self.thing_url,
            params,
            root_element="items",
            child_element="item",
            deserialize=deserialize_game,
        )

    async def get_game_by_id(self, game_id: int, stats: bool = False) -> Game:
        """Fetch a single game.

        Raises:
            ApiError: If the server does not return exactly one game
        """
        games = await self.get_games_by_id([game_id], stats=stats)
        if len(games) != 1:
            log.warning("Unexpected number of games returned", game_id=game_id, count=len(games))
            raise ApiError(f"Invalid Number of Items Returned: {len(games)}")
        return games[0]

    async def search_for(
        self,
        query: str,
        search_type: str | None = None,
        exact_match: bool = False,
    ) -> list[SearchResult]:
        """Search items by name.

        Args:
            query: Text to search for
            search_type: Optional item type filter, e.g. ``boardgame``
            exact_match: Only return exact name matches
        """
        params = {"query": query}
        if search_type:
            params["type"] = search_type
        params["exact"] = _flag(exact_match)

        log.info("Searching", query=query, search_type=search_type, exact=exact_match)
        return await self.adapter.request(
            self.search_url,
            params,
            root_element="items",
            child_element="item",
            deserialize=deserialize_search_result,
        )

    async def close(self) -> None:
        await self.http_client.close()

    async def __aenter__(self) -> "BoardGameGeek":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()
