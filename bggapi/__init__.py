"""Asynchronous client for the BoardGameGeek XML API."""

__version__ = "0.1.0"

from .models import (
    ApiResult,
    ClientConfig,
    CollectionEntry,
    Game,
    SearchResult,
)
from .services.boardgamegeek import BoardGameGeek
from .services.errors import (
    ApiError,
    BggConnectionError,
    BggError,
    ConfigurationError,
    MissingOrInvalidField,
    RequestCancelledError,
    ServerError,
    ServerNotReadyError,
    TypeConversionFailed,
    XmlError,
)
from .services.scheduling import CancellationToken

__all__ = [
    "ApiError",
    "ApiResult",
    "BggConnectionError",
    "BggError",
    "BoardGameGeek",
    "CancellationToken",
    "ClientConfig",
    "CollectionEntry",
    "ConfigurationError",
    "Game",
    "MissingOrInvalidField",
    "RequestCancelledError",
    "SearchResult",
    "ServerError",
    "ServerNotReadyError",
    "TypeConversionFailed",
    "XmlError",
    "__version__",
]
