"""
Use-case: load the historical daily price series.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from niftycast.domain.entities.series_point import SeriesPoint
from niftycast.domain.ports.historical_data_port import IHistoricalDataProvider


class GetHistoricalSeriesUseCase:
    def __init__(self, provider: IHistoricalDataProvider) -> None:
        self._provider = provider

    def execute(self, days: int = 30) -> list[SeriesPoint]:
        """Fetch *days* historical points.

        Raises:
            ValueError: if *days* is not positive, or the provider returns
                        points whose dates are not strictly increasing.
            Any exception propagated from IHistoricalDataProvider on failure.
        """
        if days < 1:
            raise ValueError("days must be a positive integer")
        points = self._provider.get_history(days)
        for previous, current in zip(points, points[1:]):
            if current.date <= previous.date:
                raise ValueError(
                    f"historical dates must be strictly increasing: "
                    f"{previous.date} followed by {current.date}"
                )
        return points
