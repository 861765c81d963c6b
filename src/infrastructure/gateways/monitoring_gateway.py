"""
Infrastructure Gateway - Monitoring Service Implementation

This module implements the historical data provider on top of the
monitoring service measurements API. Measurements are reduced to one
observation per UTC calendar day.
"""

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, List

import httpx
import structlog

from src.domain.entities.errors import DomainError
from src.domain.entities.time_series import HistoricalData
from src.domain.entities.values import ConsumptionValue, UtilityType
from src.domain.gateways.historical_data_gateway import IHistoricalDataProvider

logger = structlog.get_logger(__name__)


class MonitoringServiceError(DomainError):
    """Exception raised when monitoring service operations fail."""

    pass


class MonitoringServiceGateway(IHistoricalDataProvider):
    """Implementation of the historical data provider using HTTP client."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        """
        Initialize monitoring service gateway.

        Args:
            base_url: Base URL of the monitoring service
                (e.g., "http://monitoring-service:3000")
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def fetch_historical_data(
        self, utility_type: UtilityType
    ) -> List[HistoricalData]:
        """Fetch the daily consumption history of a utility type."""

        url = f"{self.base_url}/measurements"
        params = {"utilityType": utility_type.value}

        logger.info(
            "monitoring.fetch.start",
            url=url,
            utility_type=utility_type.value,
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url, params=params, headers={"Accept": "application/json"}
                )
                response.raise_for_status()
                payload = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "monitoring.fetch.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise MonitoringServiceError(
                f"Monitoring service returned error {e.response.status_code}: "
                f"{e.response.text}",
                {"utility_type": utility_type.value},
            ) from e

        except httpx.RequestError as e:
            logger.error("monitoring.fetch.request_error", error=str(e), url=url)
            raise MonitoringServiceError(
                f"Monitoring service request failed: {str(e)}",
                {"utility_type": utility_type.value},
            ) from e

        except ValueError as e:
            raise MonitoringServiceError(
                f"Monitoring service returned invalid JSON: {str(e)}",
                {"utility_type": utility_type.value},
            ) from e

        history = self._parse_measurements(payload, utility_type)
        logger.info(
            "monitoring.fetch.completed",
            utility_type=utility_type.value,
            days=len(history),
        )
        return history

    def _parse_measurements(
        self, payload: Any, utility_type: UtilityType
    ) -> List[HistoricalData]:
        """Group measurements by UTC day, requiring exactly one per day."""

        if not isinstance(payload, dict) or not isinstance(
            payload.get("measurements"), list
        ):
            raise MonitoringServiceError(
                "Monitoring service response has no measurements list",
                {"utility_type": utility_type.value},
            )

        by_day: Dict[date, List[Dict[str, Any]]] = defaultdict(list)
        try:
            for measurement in payload["measurements"]:
                day = self._parse_timestamp(measurement["timestamp"]).date()
                by_day[day].append(measurement)

            history = []
            for day in sorted(by_day):
                measurements = by_day[day]
                if len(measurements) != 1:
                    raise MonitoringServiceError(
                        f"Expected exactly one measurement for {day.isoformat()}, "
                        f"but found {len(measurements)}",
                        {"utility_type": utility_type.value, "date": day.isoformat()},
                    )
                history.append(
                    HistoricalData(
                        timestamp=day,
                        value=ConsumptionValue.of(measurements[0]["consumptionValue"]),
                    )
                )
        except MonitoringServiceError:
            raise
        except (KeyError, TypeError, ValueError, DomainError) as e:
            raise MonitoringServiceError(
                f"Malformed measurement in monitoring service response: {str(e)}",
                {"utility_type": utility_type.value},
            ) from e

        return history

    @staticmethod
    def _parse_timestamp(value: Any) -> datetime:
        if not isinstance(value, str):
            raise ValueError(f"timestamp must be an ISO 8601 string, got {value!r}")
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
