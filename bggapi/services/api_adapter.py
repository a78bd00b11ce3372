"""Request orchestration: issue a call, retry while not ready, parse the result."""

import xml.etree.ElementTree as ET
from collections.abc import Callable, Mapping
from typing import TypeVar

import structlog

from .classifier import check_for_api_error, check_markup_for_api_error
from .errors import RequestCancelledError, ServerNotReadyError, XmlError
from .http_client import HttpClientService
from .scheduling import AsyncioScheduler, CancellationToken, Scheduler

log = structlog.stdlib.get_logger()

T = TypeVar("T")

NOT_READY_STATUS = 202


class ApiAdapter:
    """Turns API requests into lists of deserialized records.

    The collection endpoint answers 202 while it prepares a user's
    collection. When a ``retry_until`` deadline is given, such answers are
    polled again every ``retry_delay`` seconds until a real answer arrives or
    the deadline passes. Without a deadline a 202 is final.
    """

    def __init__(
        self,
        http_client: HttpClientService,
        scheduler: Scheduler | None = None,
        retry_delay: float = 1.0,
    ) -> None:
        self.http_client: HttpClientService = http_client
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self.retry_delay: float = retry_delay

    async def request(
        self,
        url: str,
        params: Mapping[str, str],
        root_element: str,
        child_element: str,
        deserialize: Callable[[ET.Element], T],
        retry_until: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> list[T]:
        """Make an API request and parse the response into records.

        Args:
            url: The endpoint URL, without query string
            params: Query parameters, reused unchanged for every attempt
            root_element: Tag of the document's root element
            child_element: Tag of the root's children, one per record
            deserialize: Turns one child element into a record
            retry_until: Scheduler time after which a 202 is no longer retried
            cancel_token: Stops the request at its next retry point

        Returns:
            The records in document order, possibly empty

        Raises:
            BggError: The single terminal failure of the call
        """
        request_params = dict(params)
        attempt = 0

        while True:
            if cancel_token is not None and cancel_token.cancelled:
                log.info("Request cancelled before retry", url=url, attempts=attempt)
                raise RequestCancelledError()

            attempt += 1
            response = await self.http_client.get(url, params=request_params)

            if response.status_code != NOT_READY_STATUS:
                records = self.parse(response.content, root_element, child_element, deserialize)
                log.info("API request complete", url=url, records=len(records), attempts=attempt)
                return records

            if retry_until is None or self.scheduler.now() >= retry_until:
                log.warning("Server still not ready, giving up", url=url, attempts=attempt)
                raise ServerNotReadyError()

            log.info(
                "Server not ready, retrying after delay",
                url=url,
                attempt=attempt,
                delay=self.retry_delay,
            )
            await self.scheduler.sleep(self.retry_delay)

    def parse(
        self,
        content: bytes,
        root_element: str,
        child_element: str,
        deserialize: Callable[[ET.Element], T],
    ) -> list[T]:
        """Parse a response body into records.

        API errors are checked before anything else, because an error
        document can look like an empty result.

        Raises:
            ApiError: If the document is an error report
            XmlError: If the body is not XML or an element cannot be deserialized
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            api_error = check_markup_for_api_error(content.decode("utf-8", errors="replace"))
            if api_error is not None:
                raise api_error from e
            raise XmlError("Unable to parse response as XML", technical_details=str(e)) from e

        api_error = check_for_api_error(root)
        if api_error is not None:
            log.info("API reported an error", message=api_error.message)
            raise api_error

        if root.tag != root_element:
            log.warning("Unexpected root element", expected=root_element, actual=root.tag)
            return []

        records = []
        for child in root.findall(child_element):
            try:
                records.append(deserialize(child))
            except XmlError as e:
                log.warning(
                    "Failed to deserialize element",
                    element=child.tag,
                    error=e.message,
                    technical_details=e.technical_details,
                )
                raise
        return records
