"""
Port (interface) for historical price providers.
Infrastructure adapters (e.g. RandomWalkDataProvider, YFinanceHistoricalDataProvider)
must implement this interface.
"""

from abc import ABC, abstractmethod

from niftycast.domain.entities.series_point import SeriesPoint


class IHistoricalDataProvider(ABC):
    @abstractmethod
    def get_history(self, days: int) -> list[SeriesPoint]:
        """Return up to *days* daily points, oldest first, with strictly increasing dates."""
        ...
