"""
Domain Layer Package

This package contains the core business logic and rules of the application.
It defines entities, gateway and repository interfaces, ports, and the
numerical services without dependencies on external frameworks or
infrastructure concerns.
"""

# Re-export submodules
from quakecast.domain import entities, gateways, ports, repositories, services

__all__ = ["entities", "gateways", "repositories", "services", "ports"]
