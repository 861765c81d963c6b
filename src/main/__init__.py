"""
Main module - Main/Composition Root Layer

Composition root of the service: settings, the dependency injection
container, the FastAPI application factory and the uvicorn entry point.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
