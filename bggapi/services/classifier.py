"""Detection of error documents returned by the API.

Error responses can share the root element of a valid but empty result, so
they must be recognised before any entity is extracted. Two shapes are known::

    <errors><error><message>Invalid username specified</message></error></errors>

    <div class="messagebox error">error reading chunk of file</div>
"""

import xml.etree.ElementTree as ET

import structlog
from bs4 import BeautifulSoup

from .errors import ApiError

log = structlog.stdlib.get_logger()


def check_for_api_error(root: ET.Element) -> ApiError | None:
    """Return the ``ApiError`` described by a parsed document, if any.

    Args:
        root: The document's root element

    Returns:
        An ``ApiError`` carrying the service's message, or None
    """
    if root.tag == "errors":
        message = root.find("error/message")
        if message is not None and message.text is not None:
            return ApiError(message.text.strip())

    if root.tag == "div":
        return ApiError("".join(root.itertext()).strip())

    return None


def check_markup_for_api_error(text: str) -> ApiError | None:
    """Look for an error box in a body that is not well-formed XML.

    The site occasionally answers with an HTML fragment instead of XML. It is
    parsed leniently for the same two error shapes.
    """
    soup = BeautifulSoup(text, "html.parser")

    message = soup.select_one("errors error message")
    if message is not None:
        return ApiError(message.get_text(strip=True))

    div = soup.find("div")
    if div is not None:
        log.debug("Found error box in non-XML response", classes=div.get("class"))
        return ApiError(div.get_text().strip())

    return None
