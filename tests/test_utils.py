"""Tests for the sort-name and image URL helpers."""

import pytest
from hypothesis import given, strategies as st

from bggapi.utils import bgg_url, get_sort_string


@given(name=st.text(max_size=50), sort_index=st.integers(min_value=-5, max_value=60))
def test_sort_string_is_a_suffix_of_the_name(name: str, sort_index: int) -> None:
    sort_string = get_sort_string(name, sort_index)
    assert name.endswith(sort_string)


@given(data=st.data(), name=st.text(min_size=2, max_size=50))
def test_sort_index_in_range_drops_the_prefix(data: st.DataObject, name: str) -> None:
    sort_index = data.draw(st.integers(min_value=2, max_value=len(name)))
    assert get_sort_string(name, sort_index) == name[sort_index - 1:]


@given(name=st.text(min_size=1, max_size=50), sort_index=st.integers(min_value=-5, max_value=1))
def test_small_sort_index_keeps_the_full_name(name: str, sort_index: int) -> None:
    assert get_sort_string(name, sort_index) == name


@given(name=st.text(max_size=20), extra=st.integers(min_value=1, max_value=20))
def test_sort_index_past_the_end_keeps_the_full_name(name: str, extra: int) -> None:
    assert get_sort_string(name, len(name) + extra) == name


@pytest.mark.parametrize(
    "name, sort_index, expected",
    [
        ("The Castles of Burgundy", 5, "Castles of Burgundy"),
        ("A Made-Up Game", 3, "Made-Up Game"),
        ("Pandemic Legacy: Season 1", 1, "Pandemic Legacy: Season 1"),
        ("Die Macher", 5, "Macher"),
        ("X", 1, "X"),
    ],
)
def test_sort_string_examples(name: str, sort_index: int, expected: str) -> None:
    assert get_sort_string(name, sort_index) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("//cf.geekdo-images.com/images/pic2452831.png", "https://cf.geekdo-images.com/images/pic2452831.png"),
        ("https://cf.geekdo-images.com/pic.jpg", "https://cf.geekdo-images.com/pic.jpg"),
        ("", None),
        (None, None),
    ],
)
def test_bgg_url(path: str | None, expected: str | None) -> None:
    assert bgg_url(path) == expected
