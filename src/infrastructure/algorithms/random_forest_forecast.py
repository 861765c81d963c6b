"""
Infrastructure Algorithm - Random Forest Forecast

Sliding-window random forest regression for daily consumption series.

Each training row maps ``window_size`` consecutive daily values to the value
of the following day. Once fitted, the model is rolled forward one day at a
time: every prediction is pushed into the feature window used for the next
step, so later predictions build on earlier ones.
"""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import timedelta
from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np
import structlog
from sklearn.ensemble import RandomForestRegressor

from src.domain.entities.errors import InsufficientTrainingDataError
from src.domain.entities.time_series import HistoricalData
from src.domain.entities.values import ConsumptionValue, ForecastedDataPoint
from src.domain.ports.forecasting_algorithm import IForecastingAlgorithm

logger = structlog.get_logger(__name__)

RegressorFactory = Callable[[], Any]


class RandomForestForecast(IForecastingAlgorithm):
    """Random forest forecaster using a sliding window of lag features."""

    name = "RandomForest"

    def __init__(
        self,
        window_size: int = 7,
        n_trees: int = 100,
        max_depth: int = 20,
        min_samples_leaf: int = 5,
        random_state: Optional[int] = None,
        regressor_factory: Optional[RegressorFactory] = None,
    ):
        """
        Initialize the forecaster.

        Args:
            window_size: Number of previous days used as features
            n_trees: Number of trees in the forest
            max_depth: Maximum depth of each tree
            min_samples_leaf: Minimum number of samples in a leaf
            random_state: Seed forwarded to the default regressor
            regressor_factory: Builds any object exposing ``fit``/``predict``;
                defaults to a scikit-learn ``RandomForestRegressor``
        """
        if window_size <= 0:
            raise ValueError("window_size must be greater than 0")
        self.window_size = window_size
        self.n_trees = n_trees
        self.max_depth = max_depth
        self.min_samples_leaf = min_samples_leaf
        self.random_state = random_state
        self._regressor_factory = regressor_factory or self._build_random_forest

    @property
    def max_features(self) -> int:
        """Features considered per split: one third of the window, at least one."""
        return max(1, self.window_size // 3)

    async def forecast(
        self,
        historical_data: Sequence[HistoricalData],
        horizon: int,
    ) -> List[ForecastedDataPoint]:
        self.validate_inputs(historical_data, horizon)

        ordered = sorted(historical_data, key=lambda point: point.timestamp)
        values = [point.value.amount for point in ordered]
        last_date = ordered[-1].timestamp

        features, targets = self._build_training_table(values)

        logger.info(
            "forecast.algorithm.train",
            algorithm=self.name,
            historical_points=len(values),
            training_rows=len(targets),
            window_size=self.window_size,
            horizon=horizon,
        )

        model = await asyncio.to_thread(self._train_model, features, targets)
        predictions = await asyncio.to_thread(
            self._generate_predictions, model, values, horizon
        )

        return [
            ForecastedDataPoint(
                date=last_date + timedelta(days=step + 1),
                predicted_value=ConsumptionValue.of(predicted),
            )
            for step, predicted in enumerate(predictions)
        ]

    def _build_training_table(
        self, values: Sequence[float]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Build lag-feature rows and next-day targets.

        With ``window_size=3``:
          row 0 -> [v0, v1, v2], target v3
          row 1 -> [v1, v2, v3], target v4
        """
        samples = len(values) - self.window_size
        if samples <= 0:
            raise InsufficientTrainingDataError(len(values), self.window_size)

        series = np.asarray(values, dtype=np.float64)
        features = np.stack(
            [series[row : row + self.window_size] for row in range(samples)]
        )
        targets = series[self.window_size :]
        return features, targets

    def _build_random_forest(self) -> RandomForestRegressor:
        return RandomForestRegressor(
            n_estimators=self.n_trees,
            max_depth=self.max_depth,
            min_samples_leaf=self.min_samples_leaf,
            max_features=self.max_features,
            bootstrap=True,
            max_samples=None,
            random_state=self.random_state,
        )

    def _train_model(self, features: np.ndarray, targets: np.ndarray) -> Any:
        model = self._regressor_factory()
        model.fit(features, targets)
        return model

    def _generate_predictions(
        self,
        model: Any,
        historical_values: Sequence[float],
        horizon: int,
    ) -> List[float]:
        window = deque(historical_values[-self.window_size :], maxlen=self.window_size)
        predictions: List[float] = []

        for _ in range(horizon):
            feature_row = np.asarray([list(window)], dtype=np.float64)
            next_value = float(np.ravel(model.predict(feature_row))[0])
            predictions.append(next_value)
            # maxlen drops the oldest value
            window.append(next_value)

        return predictions
