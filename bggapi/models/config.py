"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://boardgamegeek.com/xmlapi2"
DEFAULT_USER_AGENT = "bggapi/0.1.0 (BoardGameGeek XML API client)"


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration settings."""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    retry_delay: float = 1.0  # Seconds between polls while a collection is being prepared
    collection_timeout: float = 90.0  # How long to keep polling a collection
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    log_level: str = "INFO"
