"""Deserializers turning XML API elements into data models.

There is one function per entity. Each takes the element that represents the
entity and returns the matching model, or raises ``TypeConversionFailed``
naming the entity and carrying the offending element. The original error is
kept as the exception's ``__cause__``, so a failure deep inside a game
(say, one of its ranks) reads as a chain from the game down to the field.

A field is only required when every known response shape carries it.
"""

import xml.etree.ElementTree as ET
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from ..models.collection import CollectionEntry, CollectionRating, CollectionStats, CollectionStatus
from ..models.game import (
    Game,
    LanguageDependencePoll,
    Link,
    PollResult,
    Rank,
    Statistics,
    SuggestedPlayerAgePoll,
    SuggestedPlayersPoll,
)
from ..models.search import SearchResult
from .errors import MissingOrInvalidField, TypeConversionFailed
from .xml_fields import (
    attribute,
    child_text,
    child_value,
    optional_attribute,
    optional_child_text,
    optional_child_value,
    parse_bool,
)

T = TypeVar("T")

Deserializer = Callable[[ET.Element], T]


def deserializer(entity: str) -> Callable[[Deserializer[T]], Deserializer[T]]:
    """Wrap a deserializer so any failure names the entity being built."""
    def decorator(func: Deserializer[T]) -> Deserializer[T]:
        @wraps(func)
        def wrapper(element: ET.Element) -> T:
            try:
                return func(element)
            except (MissingOrInvalidField, TypeConversionFailed) as e:
                raise TypeConversionFailed(entity, element) from e
        return wrapper
    return decorator


def _required_child(element: ET.Element, path: str) -> ET.Element:
    child = element.find(path)
    if child is None:
        raise MissingOrInvalidField(path, element)
    return child


# =========================
# SHARED
# =========================

@deserializer("Rank")
def deserialize_rank(element: ET.Element) -> Rank:
    """Deserialize a ``<rank>`` element.

    ``value`` and ``bayesaverage`` are "Not Ranked" for unranked games; those
    become 0 and 0.0 instead of failing the whole record.
    """
    return Rank(
        type=attribute(element, "type", str),
        id=attribute(element, "id", int),
        name=attribute(element, "name", str),
        friendly_name=attribute(element, "friendlyname", str),
        value=optional_attribute(element, "value", int) or 0,
        bayes_average=optional_attribute(element, "bayesaverage", float) or 0.0,
    )


def _ranks(element: ET.Element) -> list[Rank]:
    return [deserialize_rank(rank) for rank in element.findall("ranks/rank")]


# =========================
# THING
# =========================

@deserializer("PollResult")
def deserialize_poll_result(element: ET.Element) -> PollResult:
    """Deserialize a ``<result>`` element of any poll.

    Possible formats::

        <result level="1" value="No necessary in-game text" numvotes="1"/>
        <result value="21 and up" numvotes="0"/>
        <result value="Best" numvotes="31"/>
    """
    return PollResult(
        value=attribute(element, "value", str),
        num_votes=attribute(element, "numvotes", int),
        level=optional_attribute(element, "level", int),
    )


@deserializer("SuggestedPlayersPoll")
def deserialize_suggested_players_poll(element: ET.Element) -> SuggestedPlayersPoll:
    """Deserialize the ``suggested_numplayers`` poll.

    Results are grouped by the ``numplayers`` label of each ``<results>``
    block, kept verbatim so that "4+" and "4" stay distinct.
    """
    total_votes = attribute(element, "totalvotes", int)
    results: dict[str, list[PollResult]] | None = None

    if total_votes > 0:
        results = {}
        for group in element.findall("results"):
            label = attribute(group, "numplayers", str)
            results[label] = [deserialize_poll_result(result) for result in group.findall("result")]

    return SuggestedPlayersPoll(total_votes=total_votes, results=results)


def _flat_poll_results(element: ET.Element) -> list[PollResult] | None:
    results = [deserialize_poll_result(result) for result in element.findall("results/result")]
    return results or None


@deserializer("SuggestedPlayerAgePoll")
def deserialize_suggested_player_age_poll(element: ET.Element) -> SuggestedPlayerAgePoll:
    return SuggestedPlayerAgePoll(
        total_votes=attribute(element, "totalvotes", int),
        results=_flat_poll_results(element),
    )


@deserializer("LanguageDependencePoll")
def deserialize_language_dependence_poll(element: ET.Element) -> LanguageDependencePoll:
    return LanguageDependencePoll(
        total_votes=attribute(element, "totalvotes", int),
        results=_flat_poll_results(element),
    )


@deserializer("Link")
def deserialize_link(element: ET.Element) -> Link:
    """Deserialize a ``<link>`` element.

    ``inbound`` only appears on back-references, e.g. from an expansion to
    the game it expands.
    """
    return Link(
        type=attribute(element, "type", str),
        id=attribute(element, "id", int),
        value=attribute(element, "value", str),
        inbound=optional_attribute(element, "inbound", parse_bool),
    )


@deserializer("Statistics")
def deserialize_statistics(element: ET.Element) -> Statistics:
    """Deserialize the ``<ratings>`` block inside ``<statistics>``."""
    return Statistics(
        users_rated=child_value(element, "usersrated", int),
        average=child_value(element, "average", float),
        bayes_average=child_value(element, "bayesaverage", float),
        std_dev=child_value(element, "stddev", float),
        median=child_value(element, "median", float),
        owned=child_value(element, "owned", int),
        trading=child_value(element, "trading", int),
        wanting=child_value(element, "wanting", int),
        wishing=child_value(element, "wishing", int),
        num_comments=child_value(element, "numcomments", int),
        num_weights=child_value(element, "numweights", int),
        average_weight=child_value(element, "averageweight", float),
        ranks=_ranks(element),
    )


@deserializer("Game")
def deserialize_game(element: ET.Element) -> Game:
    """Deserialize an ``<item>`` element from the thing endpoint.

    The element looks like this (abridged)::

        <item type="boardgame" id="161936">
            <thumbnail>//cf.geekdo-images.com/images/pic2452831_t.png</thumbnail>
            <image>//cf.geekdo-images.com/images/pic2452831.png</image>
            <name type="primary" sortindex="1" value="Pandemic Legacy: Season 1"/>
            <name type="alternate" sortindex="1" value="Pandemic Legacy: Seizoen 1"/>
            <description>...</description>
            <yearpublished value="2015"/>
            <minplayers value="2"/>
            <maxplayers value="4"/>
            <poll name="suggested_numplayers" totalvotes="199">...</poll>
            <playingtime value="60"/>
            <minplaytime value="60"/>
            <maxplaytime value="60"/>
            <minage value="13"/>
            <poll name="suggested_playerage" totalvotes="60">...</poll>
            <poll name="language_dependence" totalvotes="63">...</poll>
            <link type="boardgamecategory" id="1084" value="Environmental"/>
            <statistics page="1"><ratings>...</ratings></statistics>
        </item>

    The statistics block is only present when requested with stats.
    """
    primary_name = _required_child(element, "name[@type='primary']")
    statistics = element.find("statistics/ratings")

    return Game(
        object_id=attribute(element, "id", int),
        type=attribute(element, "type", str),
        name=attribute(primary_name, "value", str),
        sort_index=attribute(primary_name, "sortindex", int),
        image_path=optional_child_text(element, "image"),
        thumbnail_path=optional_child_text(element, "thumbnail"),
        description=child_text(element, "description"),
        year_published=child_value(element, "yearpublished", int),
        min_players=child_value(element, "minplayers", int),
        max_players=child_value(element, "maxplayers", int),
        playing_time=child_value(element, "playingtime", int),
        min_playtime=child_value(element, "minplaytime", int),
        max_playtime=child_value(element, "maxplaytime", int),
        min_age=child_value(element, "minage", int),
        suggested_players=deserialize_suggested_players_poll(
            _required_child(element, "poll[@name='suggested_numplayers']")
        ),
        suggested_player_age=deserialize_suggested_player_age_poll(
            _required_child(element, "poll[@name='suggested_playerage']")
        ),
        language_dependence=deserialize_language_dependence_poll(
            _required_child(element, "poll[@name='language_dependence']")
        ),
        links=[deserialize_link(link) for link in element.findall("link")],
        stats=deserialize_statistics(statistics) if statistics is not None else None,
    )


# =========================
# COLLECTION
# =========================

@deserializer("CollectionStatus")
def deserialize_collection_status(element: ET.Element) -> CollectionStatus:
    """Deserialize a ``<status>`` element.

    Format::

        <status own="0" prevowned="0" fortrade="0" want="0" wanttoplay="1" wanttobuy="0"
                wishlist="1" wishlistpriority="3" preordered="0" lastmodified="2015-12-18 09:38:29"/>
    """
    return CollectionStatus(
        owned=attribute(element, "own", parse_bool),
        prev_owned=attribute(element, "prevowned", parse_bool),
        want_to_buy=attribute(element, "wanttobuy", parse_bool),
        want_to_play=attribute(element, "wanttoplay", parse_bool),
        preordered=attribute(element, "preordered", parse_bool),
        want_in_trade=attribute(element, "want", parse_bool),
        for_trade=attribute(element, "fortrade", parse_bool),
        wishlist=attribute(element, "wishlist", parse_bool),
        wishlist_priority=optional_attribute(element, "wishlistpriority", int),
        last_modified=attribute(element, "lastmodified", str),
    )


@deserializer("CollectionRating")
def deserialize_collection_rating(element: ET.Element) -> CollectionRating:
    """Deserialize the ``<rating>`` block of a collection entry.

    The ``value`` attribute is the user's own rating, "N/A" when unrated.
    Brief responses only carry ``average`` and ``bayesaverage``.
    """
    ranks_block = element.find("ranks")

    return CollectionRating(
        user_rating=optional_attribute(element, "value", float),
        users_rated=optional_child_value(element, "usersrated", int),
        average=child_value(element, "average", float),
        bayes_average=child_value(element, "bayesaverage", float),
        std_dev=optional_child_value(element, "stddev", float),
        median=optional_child_value(element, "median", float),
        ranks=_ranks(element) if ranks_block is not None else None,
    )


@deserializer("CollectionStats")
def deserialize_collection_stats(element: ET.Element) -> CollectionStats:
    """Deserialize the ``<stats>`` block of a collection entry."""
    return CollectionStats(
        min_players=optional_attribute(element, "minplayers", int),
        max_players=optional_attribute(element, "maxplayers", int),
        min_playtime=optional_attribute(element, "minplaytime", int),
        max_playtime=optional_attribute(element, "maxplaytime", int),
        playing_time=optional_attribute(element, "playingtime", int),
        num_owned=attribute(element, "numowned", int),
        rating=deserialize_collection_rating(_required_child(element, "rating")),
    )


@deserializer("CollectionEntry")
def deserialize_collection_entry(element: ET.Element) -> CollectionEntry:
    """Deserialize an ``<item>`` element from the collection endpoint.

    Format::

        <item objecttype="thing" objectid="177590" subtype="boardgame" collid="29096777">
            <name sortindex="1">13 Days: The Cuban Missile Crisis</name>
            <yearpublished>2015</yearpublished>
            <image>//cf.geekdo-images.com/images/pic2935653.jpg</image>
            <thumbnail>//cf.geekdo-images.com/images/pic2935653_t.jpg</thumbnail>
            <stats minplayers="2" maxplayers="2" ... numowned="238">
                <rating value="N/A">...</rating>
            </stats>
            <status own="1" prevowned="0" ... lastmodified="2016-04-04 20:19:37"/>
            <numplays>1</numplays>
        </item>
    """
    name = _required_child(element, "name")
    stats = element.find("stats")

    return CollectionEntry(
        object_id=attribute(element, "objectid", int),
        name=child_text(element, "name"),
        sort_index=attribute(name, "sortindex", int),
        collection_id=attribute(element, "collid", int),
        status=deserialize_collection_status(_required_child(element, "status")),
        stats=deserialize_collection_stats(stats) if stats is not None else None,
        year_published=optional_child_text(element, "yearpublished", int),
        image_path=optional_child_text(element, "image"),
        thumbnail_path=optional_child_text(element, "thumbnail"),
        num_plays=optional_child_text(element, "numplays", int),
        wishlist_comment=optional_child_text(element, "wishlistcomment"),
        comment=optional_child_text(element, "comment"),
    )


# =========================
# SEARCH
# =========================

@deserializer("SearchResult")
def deserialize_search_result(element: ET.Element) -> SearchResult:
    """Deserialize an ``<item>`` element from the search endpoint.

    Format::

        <item type="boardgame" id="14780">
            <name type="primary" value="Brink"/>
            <yearpublished value="2004"/>
        </item>
    """
    name = _required_child(element, "name")

    return SearchResult(
        item_type=attribute(element, "type", str),
        object_id=attribute(element, "id", int),
        name_type=attribute(name, "type", str),
        name=attribute(name, "value", str),
        year_published=optional_child_value(element, "yearpublished", int),
    )
