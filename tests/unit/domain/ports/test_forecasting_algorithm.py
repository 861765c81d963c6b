from __future__ import annotations

import pytest

from src.domain.entities.errors import (
    EmptyHistoricalDataError,
    InsufficientHistoricalDataError,
    InvalidForecastHorizonError,
)
from tests.conftest import StubForecastingAlgorithm, make_history


@pytest.mark.parametrize("horizon", [0, -1, True, 2.5])
def test_validate_inputs_rejects_bad_horizon(horizon) -> None:
    with pytest.raises(InvalidForecastHorizonError):
        StubForecastingAlgorithm().validate_inputs(make_history(10), horizon)


def test_validate_inputs_rejects_empty_history() -> None:
    with pytest.raises(EmptyHistoricalDataError):
        StubForecastingAlgorithm().validate_inputs([], 1)


def test_validate_inputs_rejects_low_history_ratio() -> None:
    with pytest.raises(InsufficientHistoricalDataError) as exc_info:
        StubForecastingAlgorithm().validate_inputs(make_history(10), 5)

    assert exc_info.value.required_percent == 70
    assert exc_info.value.actual_percent == 66


def test_validate_inputs_accepts_boundary_ratio() -> None:
    StubForecastingAlgorithm().validate_inputs(make_history(7), 3)
    StubForecastingAlgorithm().validate_inputs(make_history(70), 21)
