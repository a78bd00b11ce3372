"""HTTP client service for the XML API."""

from typing import Any

import httpx
import structlog

from ..models.config import DEFAULT_USER_AGENT
from .errors import BggConnectionError, ServerError

log = structlog.stdlib.get_logger()

ACCEPTED_STATUS_CODES = frozenset({200, 202})
XML_MEDIA_TYPES = frozenset({"text/xml", "application/xml"})


def is_xml_content_type(content_type: str | None) -> bool:
    """Check that a Content-Type header names an XML media type."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in XML_MEDIA_TYPES or media_type.endswith("+xml")


class HttpClientService:
    """Issues single GET requests and validates the transport outcome.

    A response is only handed back when its status is 200 or 202 and its
    content type is XML. Everything else is raised as a ``BggError``:
    transport failures and content type violations as
    ``BggConnectionError``, other statuses as ``ServerError``.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            verify_ssl: Whether to verify SSL certificates
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": user_agent,
                "Accept": "text/xml, application/xml",
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            verify=verify_ssl,
            transport=transport,
        )

        log.debug("HTTP client service initialized", timeout=timeout, verify_ssl=verify_ssl)

    async def get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        """Make one GET request.

        Args:
            url: The URL to request, without query string
            params: Query parameters, encoded by httpx

        Returns:
            The HTTP response, with status 200 or 202

        Raises:
            BggConnectionError: If no response was obtained or it is not XML
            ServerError: If the status code is neither 200 nor 202
        """
        log.debug("Making HTTP GET request", url=url, params=params)

        try:
            response = await self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            log.warning("HTTP GET request timed out", url=url, error=str(e))
            raise BggConnectionError(
                "The request timed out. The server may be slow or unavailable.",
                original_error=e,
                url=url,
            ) from e
        except httpx.RequestError as e:
            log.warning(
                "HTTP GET request failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise BggConnectionError(
                "Unable to connect to the server. Please check your internet connection.",
                original_error=e,
                url=url,
            ) from e

        if response.status_code not in ACCEPTED_STATUS_CODES:
            log.warning("Unexpected HTTP status", url=url, status_code=response.status_code)
            raise ServerError(response.status_code, url=str(response.url))

        content_type = response.headers.get("content-type")
        if not is_xml_content_type(content_type):
            log.warning("Response is not XML", url=url, content_type=content_type)
            raise BggConnectionError(
                f"Expected an XML response, got content type {content_type!r}",
                url=str(response.url),
            )

        log.debug(
            "HTTP GET request successful",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()
