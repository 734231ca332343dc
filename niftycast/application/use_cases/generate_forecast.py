"""
Use-case: request a forecast for the historical series and assemble the result.
Depends only on Domain ports and entities: no infrastructure imports.

At most one forecast request may be outstanding at a time. A second caller
fails fast with ForecastInProgressError instead of queueing behind the first.
There is no retry: a failed call surfaces once and the caller may re-invoke.
"""

import logging
import threading
import time

from niftycast.application.services.series_assembler import assemble_forecast, validate_forecast
from niftycast.domain.entities.series_point import AssembledSeries, SeriesPoint
from niftycast.domain.errors import (
    ForecastError,
    ForecastInProgressError,
    InsufficientHistoryError,
)
from niftycast.domain.ports.forecaster_port import IForecaster

logger = logging.getLogger(__name__)


class GenerateForecastUseCase:
    def __init__(self, forecaster: IForecaster) -> None:
        self._forecaster = forecaster
        self._in_flight = threading.Lock()

    @property
    def in_progress(self) -> bool:
        return self._in_flight.locked()

    def execute(self, historical: list[SeriesPoint], days: int) -> AssembledSeries:
        """Forecast *days* steps after *historical* and merge them in.

        Args:
            historical: Historical points, oldest first.
            days:       Forecast horizon; range checks belong to the caller.

        Raises:
            ForecastInProgressError:  if another forecast is still running.
            InsufficientHistoryError: if *historical* is empty.
            MalformedForecastError:   if the returned forecast is not a list
                                      or its steps fail validation.
            ForecastError:            if the collaborator fails or returns a
                                      horizon of the wrong length.
        """
        if not historical:
            raise InsufficientHistoryError("cannot forecast without historical data")
        if not self._in_flight.acquire(blocking=False):
            raise ForecastInProgressError("a forecast request is already in progress")
        try:
            started = time.perf_counter()
            logger.info(
                "Requesting %d-day forecast from %d historical points", days, len(historical)
            )
            result = self._forecaster.forecast(list(historical), days)
            validate_forecast(result)
            if len(result.forecast) != days:
                raise ForecastError(
                    f"expected {days} forecast steps, got {len(result.forecast)}"
                )
            assembled = assemble_forecast(historical, result)
            logger.info(
                "Forecast ready in %.2fs: %d steps from %s",
                time.perf_counter() - started,
                days,
                assembled.first_forecast_date,
            )
            return assembled
        finally:
            self._in_flight.release()
