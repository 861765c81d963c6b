from __future__ import annotations

import pytest

from src.domain.entities.errors import EmptyHistoricalDataError
from src.domain.entities.values import PeriodType
from src.domain.services.forecast_planning import (
    calculate_aggregations,
    calculate_optimal_horizon,
)
from tests.conftest import make_points


@pytest.mark.parametrize(
    ("count", "expected"), [(70, 21), (1, 1), (3, 1), (10, 3), (100, 30)]
)
def test_calculate_optimal_horizon(count: int, expected: int) -> None:
    assert calculate_optimal_horizon(count) == expected


@pytest.mark.parametrize("count", [0, -5])
def test_calculate_optimal_horizon_requires_history(count: int) -> None:
    with pytest.raises(EmptyHistoricalDataError):
        calculate_optimal_horizon(count)


def test_calculate_aggregations_sums_periods() -> None:
    aggregations = calculate_aggregations(make_points(21))

    assert aggregations == {
        PeriodType.ONE_DAY: 100.0,
        PeriodType.ONE_WEEK: 721.0,
        PeriodType.ONE_MONTH: 2310.0,
    }


def test_calculate_aggregations_with_short_forecast() -> None:
    aggregations = calculate_aggregations(make_points(3))

    assert aggregations[PeriodType.ONE_DAY] == 100.0
    assert aggregations[PeriodType.ONE_WEEK] == 303.0
    assert aggregations[PeriodType.ONE_MONTH] == 303.0


def test_calculate_aggregations_empty() -> None:
    assert calculate_aggregations([]) == {}
