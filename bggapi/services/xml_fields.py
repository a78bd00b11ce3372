"""Typed accessors for attributes and element text in API responses.

Each accessor comes as a required variant, which raises
``MissingOrInvalidField`` when the value is absent or cannot be converted,
and an optional variant, which returns ``None`` under the same conditions.
"""

import math
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import TypeVar

from .errors import MissingOrInvalidField

T = TypeVar("T")

_TRUE_WORDS = {"true", "yes"}


def parse_bool(value: str) -> bool:
    """Parse a flag the way the site writes them.

    "1", "true" and "yes" (any case) are true, as is any value starting with a
    non-zero digit. Everything else is false.
    """
    text = value.strip().lower()
    if text in _TRUE_WORDS:
        return True
    digits = text.lstrip("+-").lstrip("0")
    return bool(digits) and digits[0] in "123456789"


def _convert(raw: str | None, convert: Callable[[str], T]) -> T | None:
    if raw is None:
        return None
    # Numbers are plain decimals: no digit grouping, no nan or inf
    if convert in (int, float) and "_" in raw:
        return None
    try:
        value = convert(raw)
    except (TypeError, ValueError):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def optional_attribute(element: ET.Element | None, name: str, convert: Callable[[str], T]) -> T | None:
    """Read and convert an attribute, or return None."""
    if element is None:
        return None
    return _convert(element.get(name), convert)


def attribute(element: ET.Element | None, name: str, convert: Callable[[str], T]) -> T:
    """Read and convert a required attribute."""
    if element is None:
        raise MissingOrInvalidField(name)
    raw = element.get(name)
    value = _convert(raw, convert)
    if value is None:
        raise MissingOrInvalidField(name, element, raw)
    return value


def optional_child_text(element: ET.Element, tag: str, convert: Callable[[str], T] = str) -> T | None:  # type: ignore[assignment]
    """Read the stripped text of a child element, or return None."""
    child = element.find(tag)
    if child is None:
        return None
    return _convert((child.text or "").strip(), convert)


def child_text(element: ET.Element, tag: str, convert: Callable[[str], T] = str) -> T:  # type: ignore[assignment]
    """Read the stripped text of a required child element.

    An empty element is valid for strings and yields "".
    """
    child = element.find(tag)
    if child is None:
        raise MissingOrInvalidField(tag, element)
    raw = (child.text or "").strip()
    value = _convert(raw, convert)
    if value is None:
        raise MissingOrInvalidField(tag, child, raw)
    return value


def optional_child_value(element: ET.Element, tag: str, convert: Callable[[str], T]) -> T | None:
    """Read the ``value`` attribute of a child element, or return None."""
    return optional_attribute(element.find(tag), "value", convert)


def child_value(element: ET.Element, tag: str, convert: Callable[[str], T]) -> T:
    """Read the ``value`` attribute of a required child element.

    Most scalar fields in the API are written as ``<minplayers value="2"/>``.
    """
    child = element.find(tag)
    if child is None:
        raise MissingOrInvalidField(tag, element)
    return attribute(child, "value", convert)
