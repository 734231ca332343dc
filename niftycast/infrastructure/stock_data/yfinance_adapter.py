"""
Infrastructure adapter: yfinance -> IHistoricalDataProvider.
All yfinance-specific details (Ticker, history()) are confined here;
the rest of the codebase depends only on IHistoricalDataProvider.
"""

import logging
from datetime import date, timedelta

import yfinance as yf

from niftycast.domain.entities.series_point import SeriesPoint
from niftycast.domain.errors import HistoryUnavailableError
from niftycast.domain.ports.historical_data_port import IHistoricalDataProvider

logger = logging.getLogger(__name__)


class YFinanceHistoricalDataProvider(IHistoricalDataProvider):
    """Fetches daily closes from Yahoo Finance via the yfinance library."""

    DEFAULT_SYMBOL = "^NSEI"

    def __init__(self, symbol: str = DEFAULT_SYMBOL) -> None:
        self._symbol = symbol

    def get_history(self, days: int) -> list[SeriesPoint]:
        # Trading days are fewer than calendar days; over-fetch, then trim.
        start = date.today() - timedelta(days=max(days * 2, days + 10))
        try:
            history = yf.Ticker(self._symbol).history(start=start.isoformat(), interval="1d")
        except Exception as exc:
            logger.error("yfinance request for %s failed: %s", self._symbol, exc)
            raise HistoryUnavailableError(
                f"failed to fetch history for symbol: {self._symbol!r}"
            ) from exc

        if history.empty:
            raise HistoryUnavailableError(
                f"No historical data available for symbol: {self._symbol!r}"
            )

        points: list[SeriesPoint] = []
        for timestamp, row in history.iterrows():
            day = timestamp.strftime("%Y-%m-%d")
            # yfinance may emit an intraday row for today next to the daily bar
            if points and points[-1].date == day:
                points[-1] = SeriesPoint(date=day, price=round(float(row["Close"]), 2))
                continue
            points.append(SeriesPoint(date=day, price=round(float(row["Close"]), 2)))

        logger.info("Fetched %d daily closes for %s", len(points[-days:]), self._symbol)
        return points[-days:]
