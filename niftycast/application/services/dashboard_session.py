"""
Application service: the state behind one dashboard.

Holds the historical series (loaded once, never mutated) and the latest
assembled forecast. Use cases are injected; the session itself owns no
infrastructure.
"""

import logging
import threading
from typing import Optional

from niftycast.application.services.indicator_engine import IndicatorSettings
from niftycast.application.services.range_filter import DateLike
from niftycast.application.use_cases.build_chart_view import BuildChartViewUseCase
from niftycast.application.use_cases.generate_forecast import GenerateForecastUseCase
from niftycast.application.use_cases.get_historical_series import GetHistoricalSeriesUseCase
from niftycast.domain.entities.series_point import AssembledSeries, ChartView, SeriesPoint

logger = logging.getLogger(__name__)


class DashboardSession:
    def __init__(
        self,
        history_uc: GetHistoricalSeriesUseCase,
        forecast_uc: GenerateForecastUseCase,
        chart_uc: Optional[BuildChartViewUseCase] = None,
        history_days: int = 30,
    ) -> None:
        self._history_uc = history_uc
        self._forecast_uc = forecast_uc
        self._chart_uc = chart_uc or BuildChartViewUseCase()
        self._history_days = history_days
        self._state_lock = threading.Lock()
        self._historical: list[SeriesPoint] = []
        self._forecast: Optional[AssembledSeries] = None

    @property
    def historical(self) -> list[SeriesPoint]:
        return list(self._historical)

    @property
    def forecast(self) -> Optional[AssembledSeries]:
        return self._forecast

    def load_history(self) -> list[SeriesPoint]:
        """(Re)load the historical series; any stored forecast is discarded."""
        points = self._history_uc.execute(self._history_days)
        with self._state_lock:
            self._historical = points
            self._forecast = None
        logger.info("Loaded %d historical points", len(points))
        return list(points)

    def generate_forecast(self, days: int) -> AssembledSeries:
        """Run a forecast against the current history and keep the result.

        The previous forecast is cleared first, so a failed attempt leaves
        the dashboard showing history only.
        """
        with self._state_lock:
            historical = list(self._historical)
            self._forecast = None
        assembled = self._forecast_uc.execute(historical, days)
        with self._state_lock:
            # history may have been reloaded while the forecast was running
            if self._historical == historical:
                self._forecast = assembled
            else:
                logger.warning("Discarding stale forecast: history changed during request")
        return assembled

    def clear_forecast(self) -> None:
        with self._state_lock:
            self._forecast = None

    def chart_view(
        self,
        settings: Optional[IndicatorSettings] = None,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> ChartView:
        with self._state_lock:
            historical = list(self._historical)
            forecast = self._forecast
        return self._chart_uc.execute(historical, forecast, settings, start, end)
