"""
Infrastructure adapter: random-walk generator -> IHistoricalDataProvider.

Produces a synthetic NIFTY-like daily series ending today, one point per
calendar day. It is a fixture for demos and tests, not a market model.
"""

import logging
import random
from datetime import date, timedelta
from typing import Callable, Optional

from niftycast.domain.entities.series_point import SeriesPoint
from niftycast.domain.ports.historical_data_port import IHistoricalDataProvider

logger = logging.getLogger(__name__)


class RandomWalkDataProvider(IHistoricalDataProvider):
    """Generates a random walk starting somewhere in [19500, 20500).

    Each day moves the price by (u - 0.48) * price * 2%, with u uniform in
    [0, 1), so the drift is slightly upward. A negative price is reflected
    back above zero.
    """

    BASE_PRICE = 19500.0
    BASE_SPREAD = 1000.0
    DAILY_VOLATILITY = 0.02
    DRIFT_OFFSET = 0.48

    def __init__(
        self,
        seed: Optional[int] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._rng = random.Random(seed)
        self._today = today or date.today

    def get_history(self, days: int) -> list[SeriesPoint]:
        end = self._today()
        price = self.BASE_PRICE + self._rng.random() * self.BASE_SPREAD
        points: list[SeriesPoint] = []
        for offset in range(days - 1, -1, -1):
            change = (self._rng.random() - self.DRIFT_OFFSET) * (price * self.DAILY_VOLATILITY)
            price += change
            if price < 0:
                price = abs(price)
            points.append(
                SeriesPoint(
                    date=(end - timedelta(days=offset)).isoformat(),
                    price=round(price, 2),
                )
            )
        logger.debug("Generated %d mock points ending %s", len(points), end.isoformat())
        return points
