"""
Logging Configuration - Shared Layer

Structured logging for the API process and the training job. Both entry
points call ``configure_logging`` before settings are loaded and
``update_logging_from_settings`` once they are.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from quakecast.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO during catalog fetches.
NOISY_LOGGERS = ("httpx", "httpcore")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """Bootstrap logging options read before the settings system exists."""
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "format": os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        "file_path": os.environ.get("LOG_FILE_PATH"),
    }


def _build_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging with a structlog processor chain.

    Args:
        level: Optional override for the log level.
        format_string: Optional override for the log format. Only used for
            records emitted before structlog takes over rendering.
        file_path: Optional log file; console output is always enabled.
        environment: Application environment. Production renders JSON lines,
            every other environment uses the coloured console renderer.
    """
    env_config = _get_log_config_from_env()

    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = _build_handlers(log_file)
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.info("Logging configured with level: %s", log_level)
    if log_file:
        logging.info("Logging to file: %s", log_file)


def _enum_value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the fully loaded application settings.

    Args:
        settings: Object exposing ``logging.level``, ``logging.format``,
            ``logging.file_path`` and ``environment``.
    """
    try:
        configure_logging(
            level=_enum_value(settings.logging.level),
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=_enum_value(settings.environment),
        )
        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
