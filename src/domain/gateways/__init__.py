"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .historical_data_gateway import IHistoricalDataProvider
from .threshold_gateway import IThresholdNotifier

__all__ = ["IHistoricalDataProvider", "IThresholdNotifier"]
