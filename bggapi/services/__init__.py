"""Service layer: HTTP transport, request orchestration and XML deserialization."""

from .api_adapter import ApiAdapter
from .boardgamegeek import BoardGameGeek
from .config import ConfigurationService, ValidationResult
from .errors import (
    ApiError,
    BggConnectionError,
    BggError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    MissingOrInvalidField,
    RequestCancelledError,
    ServerError,
    ServerNotReadyError,
    TypeConversionFailed,
    UserFriendlyError,
    XmlError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .scheduling import AsyncioScheduler, CancellationToken, Scheduler

__all__ = [
    "ApiAdapter",
    "ApiError",
    "AsyncioScheduler",
    "BggConnectionError",
    "BggError",
    "BoardGameGeek",
    "CancellationToken",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "HttpClientService",
    "MissingOrInvalidField",
    "RequestCancelledError",
    "Scheduler",
    "ServerError",
    "ServerNotReadyError",
    "TypeConversionFailed",
    "UserFriendlyError",
    "ValidationResult",
    "XmlError",
    "get_error_service",
    "handle_error",
]
