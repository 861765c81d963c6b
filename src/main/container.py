"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from datetime import time

from dependency_injector import containers, providers

from src.application.use_cases.compute_forecast_use_case import (
    ComputeForecastUseCase,
)
from src.application.use_cases.get_forecasts_use_case import GetForecastsUseCase
from src.application.use_cases.health_use_cases import GetHealthStatusUseCase
from src.infrastructure.algorithms.random_forest_forecast import RandomForestForecast
from src.infrastructure.database import MongoDatabase
from src.infrastructure.gateways.monitoring_gateway import MonitoringServiceGateway
from src.infrastructure.gateways.threshold_gateway import ThresholdServiceGateway
from src.infrastructure.repositories.forecast_repository import ForecastRepository
from src.infrastructure.services.forecast_scheduler import ForecastScheduler
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    forecast_repository = providers.Singleton(
        ForecastRepository,
        mongo_database=mongo_database,
    )

    # Gateways
    monitoring_gateway = providers.Singleton(
        MonitoringServiceGateway,
        base_url=config.integration.monitoring_service_url,
        timeout=config.integration.timeout_seconds,
    )

    threshold_gateway = providers.Singleton(
        ThresholdServiceGateway,
        base_url=config.integration.threshold_service_url,
        timeout=config.integration.timeout_seconds,
    )

    forecasting_algorithm = providers.Singleton(
        RandomForestForecast,
        window_size=config.algorithm.window_size,
        n_trees=config.algorithm.n_trees,
        max_depth=config.algorithm.max_depth,
        min_samples_leaf=config.algorithm.min_samples_leaf,
        random_state=config.algorithm.random_state,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        monitoring_service_url=config.integration.monitoring_service_url,
        threshold_service_url=config.integration.threshold_service_url,
    )

    # Application (use cases)
    compute_forecast_use_case = providers.Factory(
        ComputeForecastUseCase,
        repository=forecast_repository,
        historical_data_provider=monitoring_gateway,
        forecasting_algorithm=forecasting_algorithm,
        threshold_notifier=threshold_gateway,
    )

    get_forecasts_use_case = providers.Factory(
        GetForecastsUseCase,
        repository=forecast_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    # Background services
    forecast_scheduler = providers.Singleton(
        ForecastScheduler,
        compute_forecast_use_case=compute_forecast_use_case,
        execution_time=providers.Factory(
            time, config.scheduler.hour, config.scheduler.minute
        ),
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the MongoDB indexes, runs the daily forecast scheduler when it
    is enabled, and releases everything on shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()
    scheduler = None

    try:
        await mongo_database.create_indexes()

        if container.config.scheduler.enabled():
            scheduler = container.forecast_scheduler()
            scheduler.start()
        else:
            logger.info("container.scheduler.disabled")

        logger.info("container.resources.initialized")
        yield container

    finally:
        if scheduler is not None:
            await scheduler.stop()

        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
