"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel
from src.shared.env import load_secret_file_variables  # noqa: F401


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="forecasting", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="Forecasting Service", description="Service title")
    description: str = Field(
        default="Daily utility consumption forecasts computed from "
        "monitoring history",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8080, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class IntegrationSettings(BaseSettings):
    """Base URLs of the services the forecaster talks to."""

    monitoring_service_url: str = Field(
        default="http://monitoring-service:3000",
        description="Monitoring service base URL (historical measurements)",
    )
    threshold_service_url: str = Field(
        default="http://threshold-service:3000",
        description="Threshold service base URL (forecast evaluations)",
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="HTTP request timeout in seconds"
    )

    model_config = SettingsConfigDict(
        env_prefix="INTEGRATION_", case_sensitive=False, extra="ignore"
    )


class SchedulerSettings(BaseSettings):
    """Daily forecast computation schedule."""

    enabled: bool = Field(default=True, description="Run the daily scheduler")
    hour: int = Field(default=0, ge=0, le=23, description="Local hour of the run")
    minute: int = Field(default=0, ge=0, le=59, description="Minute of the run")

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class AlgorithmSettings(BaseSettings):
    """Random forest forecaster hyper-parameters."""

    window_size: int = Field(default=7, gt=0, description="Lag window in days")
    n_trees: int = Field(default=100, gt=0, description="Number of trees")
    max_depth: int = Field(default=20, gt=0, description="Maximum tree depth")
    min_samples_leaf: int = Field(
        default=5, gt=0, description="Minimum samples per leaf"
    )
    random_state: Optional[int] = Field(
        default=None, description="Seed for reproducible forests"
    )

    model_config = SettingsConfigDict(
        env_prefix="ALGORITHM_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    integration: IntegrationSettings = Field(default_factory=IntegrationSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    algorithm: AlgorithmSettings = Field(default_factory=AlgorithmSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Kept as a function so tests can patch it with custom settings.
    """
    return AppSettings()
