"""
Forecasts Router - Presentation Layer

This module defines the FastAPI router for forecast endpoints.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.forecast_dto import (
    ForecastListResponseDTO,
    ForecastResponseDTO,
)
from src.application.use_cases.compute_forecast_use_case import (
    ComputeForecastUseCase,
)
from src.application.use_cases.get_forecasts_use_case import GetForecastsUseCase
from src.domain.entities.errors import ForecastValidationError
from src.domain.entities.values import UtilityType
from src.infrastructure.gateways.monitoring_gateway import MonitoringServiceError
from src.infrastructure.gateways.threshold_gateway import ThresholdServiceError
from src.shared import API_PREFIX
from src.shared.consts import FORECASTS_TAG

logger = structlog.get_logger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/forecasts", tags=[FORECASTS_TAG])


def _parse_utility_type(value: str) -> UtilityType:
    try:
        return UtilityType.from_string(value)
    except ForecastValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=e.message
        ) from e


def _to_http_exception(error: Exception, event: str, **context) -> HTTPException:
    if isinstance(error, ForecastValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=error.message
        )
    if isinstance(error, (MonitoringServiceError, ThresholdServiceError)):
        logger.error(event, error=str(error), **context)
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message
        )
    logger.error(event, error=str(error), error_type=type(error).__name__, **context)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get("", response_model=ForecastListResponseDTO)
@inject
async def get_forecasts(
    utility_type: Optional[str] = Query(
        None, description="Restrict the result to one utility type (e.g., 'WATER')"
    ),
    get_forecasts_use_case: GetForecastsUseCase = Depends(
        Provide["get_forecasts_use_case"]
    ),
) -> ForecastListResponseDTO:
    """
    List the stored forecasts.

    Without a filter every utility type with a forecast is returned. With
    ``utility_type`` the list holds at most that utility's forecast.
    """
    if utility_type is None:
        try:
            forecasts = await get_forecasts_use_case.get_all()
        except Exception as e:
            raise _to_http_exception(e, "forecasts.list.failed") from e
        return ForecastListResponseDTO.from_domain(forecasts)

    return await _forecasts_of(_parse_utility_type(utility_type), get_forecasts_use_case)


@router.get("/{utility_type}", response_model=ForecastListResponseDTO)
@inject
async def get_forecasts_by_utility(
    utility_type: str,
    get_forecasts_use_case: GetForecastsUseCase = Depends(
        Provide["get_forecasts_use_case"]
    ),
) -> ForecastListResponseDTO:
    """Get the forecast of a utility type, as a list that is empty if none exists."""
    return await _forecasts_of(_parse_utility_type(utility_type), get_forecasts_use_case)


async def _forecasts_of(
    utility_type: UtilityType, use_case: GetForecastsUseCase
) -> ForecastListResponseDTO:
    try:
        forecast = await use_case.get_by_utility(utility_type)
    except Exception as e:
        raise _to_http_exception(
            e, "forecasts.get.failed", utility_type=utility_type.value
        ) from e
    return ForecastListResponseDTO.from_domain([forecast] if forecast else [])


@router.post("/compute", response_model=ForecastListResponseDTO)
@inject
async def compute_forecasts(
    compute_forecast_use_case: ComputeForecastUseCase = Depends(
        Provide["compute_forecast_use_case"]
    ),
) -> ForecastListResponseDTO:
    """
    Recompute the forecast of every utility type.

    Utility types whose computation fails are logged and left out of the
    response.
    """
    try:
        forecasts = await compute_forecast_use_case.compute_all()
    except Exception as e:
        raise _to_http_exception(e, "forecasts.compute_all.failed") from e
    return ForecastListResponseDTO.from_domain(forecasts)


@router.post(
    "/{utility_type}/compute",
    response_model=ForecastResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def compute_forecast(
    utility_type: str,
    compute_forecast_use_case: ComputeForecastUseCase = Depends(
        Provide["compute_forecast_use_case"]
    ),
) -> ForecastResponseDTO:
    """Recompute and store the forecast of a single utility type."""
    parsed = _parse_utility_type(utility_type)
    try:
        forecast = await compute_forecast_use_case.compute_one(parsed)
    except Exception as e:
        raise _to_http_exception(
            e, "forecasts.compute.failed", utility_type=parsed.value
        ) from e
    return ForecastResponseDTO.from_domain(forecast)
