"""Tests for the data models and the result wrapper."""

import dataclasses

import pytest

from bggapi.models import (
    ApiResult,
    CollectionEntry,
    CollectionStatus,
    LanguageDependencePoll,
    PollResult,
    SuggestedPlayerAgePoll,
    SuggestedPlayersPoll,
)
from bggapi.services.errors import ApiError, XmlError


def make_status(**overrides) -> CollectionStatus:
    values = dict(
        owned=True,
        prev_owned=False,
        want_to_buy=False,
        want_to_play=False,
        preordered=False,
        want_in_trade=False,
        for_trade=False,
        wishlist=False,
        last_modified="2016-04-04 20:19:37",
    )
    values.update(overrides)
    return CollectionStatus(**values)


class TestApiResult:

    def test_success(self) -> None:
        result = ApiResult.success([1, 2])
        assert result.is_success
        assert not result.is_failure
        assert result.unwrap() == [1, 2]

    def test_empty_list_is_a_success(self) -> None:
        result = ApiResult.success([])
        assert result.is_success
        assert result.unwrap() == []

    def test_failure(self) -> None:
        result = ApiResult.failure(ApiError("Invalid Number of Items Returned: 0"))
        assert result.is_failure
        assert result.value is None
        with pytest.raises(ApiError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_capture_wraps_bgg_errors(self) -> None:
        async def failing() -> list[int]:
            raise XmlError("broken")

        result = await ApiResult.capture(failing())

        assert result.error == XmlError("broken")

    @pytest.mark.asyncio
    async def test_capture_lets_other_errors_through(self) -> None:
        async def failing() -> list[int]:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await ApiResult.capture(failing())


class TestPolls:
    """The three poll shapes share the same capability."""

    def test_all_results(self) -> None:
        best = PollResult(value="Best", num_votes=3)
        polls = [
            SuggestedPlayersPoll(total_votes=3, results={"2": [best], "3": [best]}),
            SuggestedPlayerAgePoll(total_votes=3, results=[best]),
            LanguageDependencePoll(total_votes=3, results=[PollResult("No necessary in-game text", 3, level=1)]),
        ]

        assert [len(poll.all_results()) for poll in polls] == [2, 1, 1]
        assert all(poll.total_votes == 3 for poll in polls)

    def test_empty_polls(self) -> None:
        assert SuggestedPlayersPoll(total_votes=0).all_results() == []
        assert SuggestedPlayerAgePoll(total_votes=0).all_results() == []
        assert LanguageDependencePoll(total_votes=0).all_results() == []


class TestCollectionEntry:

    def test_entries_are_immutable(self) -> None:
        entry = CollectionEntry(object_id=1, name="Game", sort_index=1, collection_id=2, status=make_status())
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.name = "Other"  # type: ignore[misc]

    def test_urls(self) -> None:
        entry = CollectionEntry(
            object_id=1,
            name="Game",
            sort_index=1,
            collection_id=2,
            status=make_status(),
            image_path="//path.to/image.jpg",
        )
        assert entry.image_url == "https://path.to/image.jpg"
        assert entry.thumbnail_url is None
