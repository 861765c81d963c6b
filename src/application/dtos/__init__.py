"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .forecast_dto import (
    DataPointResponseDTO,
    ForecastListResponseDTO,
    ForecastResponseDTO,
)
from .health_dto import DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "DataPointResponseDTO",
    "ForecastResponseDTO",
    "ForecastListResponseDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
]
