"""Configuration service for loading and saving client settings."""

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import structlog

from ..models import ClientConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing client configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "bggapi" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> ClientConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return ClientConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data: Any = json.load(f)

            if not isinstance(data, dict):
                log.warning("Configuration file is not a JSON object, using defaults", found=type(data).__name__)
                return ClientConfig()

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return ClientConfig()

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return ClientConfig()

    def save_config(self, config: ClientConfig) -> None:
        """Save configuration to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(validation_result.errors)

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: ClientConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        parsed = urlparse(config.base_url) if isinstance(config.base_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("base_url must be an absolute http(s) URL")

        if not isinstance(config.request_timeout, (int, float)) or config.request_timeout <= 0:
            errors.append("request_timeout must be a positive number")

        if not isinstance(config.retry_delay, (int, float)) or config.retry_delay < 0:
            errors.append("retry_delay must be a non-negative number")
        elif config.retry_delay > 60:
            errors.append("retry_delay should not exceed 60 seconds")

        if not isinstance(config.collection_timeout, (int, float)) or config.collection_timeout < 0:
            errors.append("collection_timeout must be a non-negative number")

        if not isinstance(config.user_agent, str) or not config.user_agent.strip():
            errors.append("user_agent cannot be empty")

        if not isinstance(config.verify_ssl, bool):
            errors.append("verify_ssl must be a boolean")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        return ValidationResult(len(errors) == 0, errors)

    def _dict_to_config(self, data: dict[str, Any]) -> ClientConfig:
        """Convert dictionary to ClientConfig, ignoring unknown keys."""
        known = {f.name for f in fields(ClientConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning("Ignoring unknown configuration keys", keys=unknown)
        return ClientConfig(**{key: value for key, value in data.items() if key in known})
