"""
Port (interface) for forecast collaborators.
Infrastructure adapters (e.g. LLMForecaster) must implement this interface.
"""

from abc import ABC, abstractmethod

from niftycast.domain.entities.series_point import ForecastResult, SeriesPoint


class IForecaster(ABC):
    @abstractmethod
    def forecast(self, series: list[SeriesPoint], days: int) -> ForecastResult:
        """Predict *days* steps following *series*.

        Raises:
            ForecastError: on any failure or malformed response. Partial
                           results are never returned.
        """
        ...
