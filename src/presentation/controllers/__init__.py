"""
Controllers Package - Presentation Layer

FastAPI routers that translate HTTP requests into use case calls and map
domain errors to HTTP status codes.
"""

from .forecasts_controller import router as forecasts_router
from .system_controller import router as system_router

__all__ = ["forecasts_router", "system_router"]
