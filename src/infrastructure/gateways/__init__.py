"""
Gateways Package - Infrastructure Layer

HTTP clients for the monitoring service (consumption history) and the
threshold service (forecast evaluations).
"""

from .monitoring_gateway import MonitoringServiceError, MonitoringServiceGateway
from .threshold_gateway import ThresholdServiceError, ThresholdServiceGateway

__all__ = [
    "MonitoringServiceError",
    "MonitoringServiceGateway",
    "ThresholdServiceError",
    "ThresholdServiceGateway",
]
