"""
Infrastructure Gateway - Threshold Service Implementation

Forwards aggregated forecast totals to the threshold evaluation service.
"""

from typing import Any, Dict, Mapping

import httpx
import structlog

from src.domain.entities.errors import DomainError
from src.domain.entities.values import PeriodType, UtilityType
from src.domain.gateways.threshold_gateway import IThresholdNotifier

logger = structlog.get_logger(__name__)

FORECAST_EVALUATION_PATH = "/api/internal/thresholds/evaluations/forecast"


class ThresholdServiceError(DomainError):
    """Exception raised when threshold service operations fail."""

    pass


class ThresholdServiceGateway(IThresholdNotifier):
    """Implementation of the threshold notifier using HTTP client."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @staticmethod
    def build_payload(
        utility_type: UtilityType, aggregations: Mapping[PeriodType, float]
    ) -> Dict[str, Any]:
        return {
            "utilityType": utility_type.value,
            "aggregations": [
                {"periodType": period.value, "value": float(value)}
                for period, value in aggregations.items()
            ],
        }

    async def notify_forecast_aggregations(
        self,
        utility_type: UtilityType,
        aggregations: Mapping[PeriodType, float],
    ) -> None:
        url = f"{self.base_url}{FORECAST_EVALUATION_PATH}"
        payload = self.build_payload(utility_type, aggregations)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(
                "threshold.notify.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise ThresholdServiceError(
                f"Threshold service returned error {e.response.status_code}: "
                f"{e.response.text}",
                {"utility_type": utility_type.value},
            ) from e

        except httpx.RequestError as e:
            logger.error("threshold.notify.request_error", error=str(e), url=url)
            raise ThresholdServiceError(
                f"Threshold service request failed: {str(e)}",
                {"utility_type": utility_type.value},
            ) from e

        logger.info(
            "threshold.notify.completed",
            utility_type=utility_type.value,
            periods=[period.value for period in aggregations],
        )
