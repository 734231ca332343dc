from types import SimpleNamespace

import pytest

from niftycast.domain.errors import HistoryUnavailableError
from niftycast.infrastructure.stock_data import yfinance_adapter
from niftycast.infrastructure.stock_data.yfinance_adapter import YFinanceHistoricalDataProvider


def _patch_ticker(monkeypatch, history):
    class FakeTicker:
        def __init__(self, symbol):
            self.symbol = symbol

        def history(self, **kwargs):
            return history(**kwargs)

    monkeypatch.setattr(yfinance_adapter, "yf", SimpleNamespace(Ticker=FakeTicker))


def test_network_failure_is_reported_as_unavailable(monkeypatch):
    def history(**kwargs):
        raise ConnectionError("Yahoo is down")

    _patch_ticker(monkeypatch, history)
    with pytest.raises(HistoryUnavailableError) as excinfo:
        YFinanceHistoricalDataProvider().get_history(30)
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_empty_download_is_reported_as_unavailable(monkeypatch):
    _patch_ticker(monkeypatch, lambda **kwargs: SimpleNamespace(empty=True))
    with pytest.raises(HistoryUnavailableError, match="NSEI"):
        YFinanceHistoricalDataProvider().get_history(30)
