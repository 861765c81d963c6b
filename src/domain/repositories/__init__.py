"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .forecast_repository import IForecastRepository

__all__ = ["IForecastRepository"]
