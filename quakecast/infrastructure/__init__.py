"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the USGS catalog,
artifact storage, rate limiting and response caching.
"""

from quakecast.infrastructure import gateways, repositories, services

__all__ = ["gateways", "repositories", "services"]
