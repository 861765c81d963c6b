"""
Domain Entities - Forecast

This module defines the ForecastedConsumption aggregate: the ordered daily
predictions computed for one utility type, together with its identity and
computation timestamp.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Tuple

from src.domain.entities.errors import EmptyForecastError, InvalidDateRangeError
from src.domain.entities.values import ForecastedDataPoint, ForecastId, UtilityType


class ForecastedConsumption:
    """Immutable forecast of daily consumption for a utility type.

    Instances are built through :meth:`create` for fresh computations or
    :meth:`from_persistence` when reloaded from storage. Equality and hashing
    rely on the identifier only.
    """

    __slots__ = ("_id", "_utility_type", "_data_points", "_computed_at")

    def __init__(
        self,
        forecast_id: ForecastId,
        utility_type: UtilityType,
        data_points: Iterable[ForecastedDataPoint],
        computed_at: datetime,
    ) -> None:
        ordered = tuple(sorted(data_points, key=lambda point: point.date))
        if not ordered:
            raise EmptyForecastError()

        self._id = forecast_id
        self._utility_type = utility_type
        self._data_points: Tuple[ForecastedDataPoint, ...] = ordered
        self._computed_at = computed_at

    @classmethod
    def create(
        cls,
        utility_type: UtilityType,
        data_points: Iterable[ForecastedDataPoint],
        computed_at: Optional[datetime] = None,
    ) -> "ForecastedConsumption":
        """Build a new forecast with a generated identifier."""
        return cls(
            forecast_id=ForecastId.generate(),
            utility_type=utility_type,
            data_points=data_points,
            computed_at=computed_at or datetime.now(timezone.utc),
        )

    @classmethod
    def from_persistence(
        cls,
        forecast_id: ForecastId,
        utility_type: UtilityType,
        data_points: Iterable[ForecastedDataPoint],
        computed_at: datetime,
    ) -> "ForecastedConsumption":
        """Rebuild a stored forecast, keeping its identifier and timestamp."""
        return cls(
            forecast_id=forecast_id,
            utility_type=utility_type,
            data_points=data_points,
            computed_at=computed_at,
        )

    @property
    def id(self) -> ForecastId:
        return self._id

    @property
    def utility_type(self) -> UtilityType:
        return self._utility_type

    @property
    def data_points(self) -> Tuple[ForecastedDataPoint, ...]:
        return self._data_points

    @property
    def computed_at(self) -> datetime:
        return self._computed_at

    @property
    def start_date(self) -> date:
        return self._data_points[0].date

    @property
    def end_date(self) -> date:
        return self._data_points[-1].date

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def forecasts_in_range(self, start: date, end: date) -> List[ForecastedDataPoint]:
        """Return the predictions dated between ``start`` and ``end`` inclusive.

        Raises:
            InvalidDateRangeError: If ``end`` is before ``start``.
        """
        if end < start:
            raise InvalidDateRangeError(
                "End date cannot be before start date",
                {"start": start.isoformat(), "end": end.isoformat()},
            )
        return [point for point in self._data_points if start <= point.date <= end]

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ForecastedConsumption):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"ForecastedConsumption(id={self._id}, "
            f"utility_type={self._utility_type.value}, "
            f"points={len(self._data_points)}, "
            f"computed_at={self._computed_at.isoformat()})"
        )
