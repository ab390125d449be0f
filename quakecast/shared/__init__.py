"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, physical
  constants such as the Earth radius)
- Configuring structured logging

Following Clean Architecture principles:
- Shared module contains only *cross-cutting concerns*
- It must not depend on Infrastructure or Frameworks
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
