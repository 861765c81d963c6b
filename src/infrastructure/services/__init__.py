"""Infrastructure services package."""

from .forecast_scheduler import ForecastScheduler
from .health_check_service import HealthCheckService

__all__ = ["ForecastScheduler", "HealthCheckService"]
