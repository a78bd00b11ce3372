"""Logging configuration for applications using the client.

The library itself only emits through ``structlog.stdlib.get_logger()``;
nothing is configured on import. Applications (and the bundled command line)
call ``setup_logging`` once at start-up.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

ENVIRONMENT_VARIABLE = "BGGAPI_ENVIRONMENT"
LOG_FORMATS = ("console", "json")

# Third-party loggers that are chatty at INFO (one line per request)
NOISY_LOGGERS = ("httpx", "httpcore")

MAIN_LOG_NAME = "bggapi.log"
ERROR_LOG_NAME = "error.log"


def _rotating_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


class LoggingService:
    """Configures structlog and the standard library handlers it writes to.

    Records go to stderr (optional) and, when ``log_dir`` is set, to
    ``bggapi.log`` plus an ``error.log`` that only receives errors. The
    renderer is picked from ``log_format``; without one, development
    environments get the console renderer unless files are written, and
    everything else gets JSON.
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        console: bool = True,
        log_format: str | None = None,
    ) -> None:
        if log_format is not None and log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of: {', '.join(LOG_FORMATS)}")

        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv(ENVIRONMENT_VARIABLE, "development") == "development"
        self.log_format = log_format or self._default_format()

    def _default_format(self) -> str:
        if self.is_development and not self.log_dir:
            return "console"
        return "json"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def configure(self) -> None:
        """Install handlers on the root logger and configure structlog."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)

        for handler in self._build_handlers():
            root_logger.addHandler(handler)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(self.numeric_level, logging.WARNING))

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = []

        # stdout is reserved for command output
        if self.console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self.numeric_level)
            if self.log_format == "console":
                console_handler.setFormatter(logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S",
                ))
            else:
                console_handler.setFormatter(logging.Formatter("%(message)s"))
            handlers.append(console_handler)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(_rotating_handler(
                self.log_dir / MAIN_LOG_NAME, self.numeric_level, max_bytes=10 * 1024 * 1024, backup_count=5
            ))
            handlers.append(_rotating_handler(
                self.log_dir / ERROR_LOG_NAME, logging.ERROR, max_bytes=5 * 1024 * 1024, backup_count=3
            ))

        return handlers

    def _get_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.log_format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())
        return processors

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
    log_format: str | None = None,
) -> LoggingService:
    """Set up application logging.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for log files (None for console only)
        environment: Environment name (development/production), stored in
            ``BGGAPI_ENVIRONMENT``
        console: Whether to log to stderr
        log_format: "console" or "json"; derived from the environment when None

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ[ENVIRONMENT_VARIABLE] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console, log_format=log_format)
    service.configure()
    return service
