"""Error types and error handling for the BoardGameGeek API client.

This module provides:
- The closed set of exceptions a caller can see from an API call
- User-friendly error messages with suggested actions
- A centralized error handling service used by the command line

Every exception raised by the client derives from ``BggError``.
"""

import time
import xml.etree.ElementTree as ET
from collections import Counter, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()

_MAX_ELEMENT_CHARS = 500


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    CONNECTION = "connection"
    SERVER = "server"
    API = "api"
    XML = "xml"
    CONFIGURATION = "configuration"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class BggError(Exception):
    """Base exception class for client errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class BggConnectionError(BggError):
    """No usable response was obtained from the server."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {str(original_error)}"
        if url:
            technical_details = f"URL: {url}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.CONNECTION,
            suggested_actions=[
                "Check your internet connection",
                "Verify the base URL in the configuration",
                "Try again in a few moments",
            ],
            technical_details=technical_details,
        )
        self.original_error = original_error
        self.url = url


class ServerError(BggError):
    """The server answered with a status code other than 200 or 202."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        if status_code == 429:
            suggested_actions = [
                "Wait a few minutes before retrying",
                "Make fewer requests in a short period",
            ]
        elif status_code >= 500:
            suggested_actions = [
                "The server is experiencing issues",
                "Try again later",
            ]
        else:
            suggested_actions = ["Check the request parameters"]

        technical_details = f"Status: {status_code}"
        if url:
            technical_details += f"\nURL: {url}"

        super().__init__(
            message=f"Server Error: HTTP {status_code}",
            category=ErrorCategory.SERVER,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
        )
        self.status_code = status_code
        self.url = url


class ServerNotReadyError(BggError):
    """The server kept answering 202 until the retry deadline passed."""

    def __init__(self, message: str = "Server not ready") -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.SERVER,
            severity=ErrorSeverity.WARNING,
            suggested_actions=[
                "The collection is still being prepared by the site",
                "Try again with a longer timeout",
            ],
        )


class ApiError(BggError):
    """The service understood the request but reported an error."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.API,
            suggested_actions=["Check the username, ids or query you requested"],
        )


class XmlError(BggError):
    """The response did not have the expected XML structure."""

    def __init__(self, message: str, technical_details: str | None = None) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.XML,
            suggested_actions=[
                "The API format may have changed",
                "Report the problem along with the technical details",
            ],
            technical_details=technical_details,
        )


class MissingOrInvalidField(XmlError):
    """A required attribute or element was missing or could not be converted."""

    def __init__(
        self,
        field: str,
        element: ET.Element | None = None,
        value: str | None = None,
    ) -> None:
        message = f"Missing or invalid field '{field}'"
        if element is not None:
            message += f" on <{element.tag}>"
        if value is not None:
            message += f": {value[:100]!r}"
        super().__init__(message)
        self.field = field
        self.element = element
        self.value = value


class TypeConversionFailed(XmlError):
    """An element could not be deserialized into the named entity."""

    def __init__(self, entity: str, element: ET.Element) -> None:
        snippet = ET.tostring(element, encoding="unicode").strip()
        if len(snippet) > _MAX_ELEMENT_CHARS:
            snippet = snippet[:_MAX_ELEMENT_CHARS] + "..."
        super().__init__(
            message=f"Could Not Deserialize {entity}: <{element.tag}>",
            technical_details=snippet,
        )
        self.entity = entity
        self.element = element


class ConfigurationError(BggError):
    """A configuration could not be saved because it failed validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(
            message=f"Invalid configuration: {', '.join(errors)}",
            category=ErrorCategory.CONFIGURATION,
            suggested_actions=["Fix the listed settings and save again"],
            recoverable=False,
        )
        self.errors = errors


class RequestCancelledError(BggError):
    """A caller cancelled a request while it was waiting to retry."""

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CANCELLED,
            severity=ErrorSeverity.WARNING,
        )


@dataclass(frozen=True)
class ErrorRecord:
    """One handled error with where and when it happened."""
    error: BggError
    operation: str
    component: str
    timestamp: float


class ErrorHandlingService:
    """Turns any exception from a client call into a reportable ``BggError``.

    Errors the client raised itself pass through unchanged. Exceptions from
    httpx or the XML parser that escaped (for instance from code driving
    ``HttpClientService`` directly) are mapped onto the same hierarchy, and
    anything else becomes a generic ``BggError`` that keeps the original
    type and text as technical details.
    """

    def __init__(self, max_history_size: int = 100) -> None:
        self._history: deque[ErrorRecord] = deque(maxlen=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Record and log an error.

        Args:
            error: The exception that was raised
            operation: What was being done, e.g. "collection" or "thing"
            component: Where it happened, e.g. "cli"
            context: Extra key/value details for the log, such as the url

        Returns:
            User-friendly error representation
        """
        bgg_error = self.convert(error, context)
        self._log_error(bgg_error, operation, component, context)
        self._history.append(ErrorRecord(bgg_error, operation, component, time.time()))
        return bgg_error.to_user_friendly()

    def convert(self, error: Exception, context: dict[str, Any] | None = None) -> BggError:
        """Map an exception onto the ``BggError`` hierarchy."""
        if isinstance(error, BggError):
            return error

        url = (context or {}).get("url")

        if isinstance(error, httpx.HTTPStatusError):
            return ServerError(error.response.status_code, url=str(error.request.url))
        if isinstance(error, httpx.TimeoutException):
            return BggConnectionError(
                "The request timed out. The server may be slow or unavailable.",
                original_error=error,
                url=url,
            )
        if isinstance(error, httpx.ConnectError):
            return BggConnectionError(
                "Unable to connect to the server. Please check your internet connection.",
                original_error=error,
                url=url,
            )
        if isinstance(error, httpx.RequestError):
            return BggConnectionError(
                "A network error occurred. Please check your connection.",
                original_error=error,
                url=url,
            )
        if isinstance(error, ET.ParseError):
            return XmlError("Unable to parse response as XML", technical_details=str(error))

        return BggError(
            "An unexpected error occurred. Please try again.",
            technical_details=f"{type(error).__name__}: {error}",
            recoverable=False,
        )

    def _log_error(
        self,
        error: BggError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        emit = log.warning if error.severity == ErrorSeverity.WARNING else log.error
        emit(
            "Request failed",
            error_message=error.message,
            error_type=type(error).__name__,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[BggError]:
        """The last ``count`` errors, oldest first."""
        if count <= 0:
            return []
        return [record.error for record in list(self._history)[-count:]]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        return dict(Counter(record.error.category for record in self._history))

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
        include_details: bool = False,
    ) -> str:
        """Format an error for printing to a terminal.

        Suggestions are capped at three; technical details are only added
        when asked for, since they can contain whole XML elements.
        """
        lines = [error.message]

        if include_suggestions and error.suggested_actions:
            lines.append("")
            lines.append("Suggested actions:")
            lines.extend(f"  - {action}" for action in error.suggested_actions[:3])

        if include_details and error.technical_details:
            lines.append("")
            lines.append("Details:")
            lines.extend(f"  {line}" for line in error.technical_details.splitlines())

        return "\n".join(lines)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the process-wide error handling service."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Handle an error with the process-wide service."""
    return get_error_service().handle_error(error, operation, component, context)
