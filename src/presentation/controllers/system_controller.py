"""System endpoints exposing dependency health."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.health_dto import SystemHealthDTO
from src.application.use_cases.health_use_cases import GetHealthStatusUseCase
from src.shared import get_logger
from src.shared.consts import SYSTEM_TAG

logger = get_logger(__name__)

router = APIRouter(tags=[SYSTEM_TAG])


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Return the health of MongoDB and the monitoring and threshold services."""
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    logger.debug("health.check.success", status=health_status.status.value)
    return health_status
