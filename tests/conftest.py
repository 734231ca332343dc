from datetime import date, timedelta

import pytest

from niftycast.domain.entities.series_point import ForecastResult, ForecastStep, SeriesPoint
from niftycast.domain.errors import ForecastError, HistoryUnavailableError
from niftycast.domain.ports.forecaster_port import IForecaster
from niftycast.domain.ports.historical_data_port import IHistoricalDataProvider


def make_series(prices, start="2024-01-01"):
    first = date.fromisoformat(start)
    return [
        SeriesPoint(date=(first + timedelta(days=i)).isoformat(), price=float(p))
        for i, p in enumerate(prices)
    ]


def make_result(prices, spread=10.0, **metrics):
    steps = [ForecastStep(price=p, high=p + spread, low=p - spread) for p in prices]
    return ForecastResult(forecast=steps, summary="Sideways with a mild upward bias.", **metrics)


class StaticHistoryProvider(IHistoricalDataProvider):
    def __init__(self, points):
        self.points = points
        self.calls = 0

    def get_history(self, days):
        self.calls += 1
        return self.points[-days:]


class UnreachableHistoryProvider(IHistoricalDataProvider):
    def __init__(self):
        self.calls = 0

    def get_history(self, days):
        self.calls += 1
        raise HistoryUnavailableError("history source is unreachable")


class StubForecaster(IForecaster):
    """Returns a linear forecast climbing from the last price, or raises *error*."""

    def __init__(self, error=None, step=1.0):
        self.error = error
        self.step = step
        self.calls = []

    def forecast(self, series, days):
        self.calls.append((len(series), days))
        if self.error is not None:
            raise self.error
        last = series[-1].price
        return make_result([last + self.step * (k + 1) for k in range(days)])


@pytest.fixture
def rising_series():
    # 100, 101, ..., 129 starting 2024-01-01
    return make_series(range(100, 130))


@pytest.fixture
def history_provider(rising_series):
    return StaticHistoryProvider(rising_series)


@pytest.fixture
def stub_forecaster():
    return StubForecaster()


@pytest.fixture
def failing_forecaster():
    return StubForecaster(error=ForecastError("model unavailable"))
