"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as databases,
external services, and frameworks.
"""

from src.infrastructure import algorithms, database, gateways, repositories, services

__all__ = ["algorithms", "database", "gateways", "repositories", "services"]
