"""Domain entities for time-series / historic data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.domain.entities.values import ConsumptionValue


@dataclass(frozen=True, slots=True)
class HistoricalData:
    """Represents a single daily consumption observation."""

    timestamp: date
    value: ConsumptionValue
