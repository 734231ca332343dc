import pytest
from fastapi.testclient import TestClient

from conftest import StaticHistoryProvider, StubForecaster, UnreachableHistoryProvider
from niftycast.domain.errors import ForecastError
from niftycast.infrastructure.entrypoints.composition import build_session
from niftycast.infrastructure.entrypoints.fastapi_app import create_app


@pytest.fixture
def forecaster():
    return StubForecaster()


@pytest.fixture
def client(history_provider, forecaster):
    app = create_app(build_session(history_provider, forecaster, history_days=30))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_series_without_forecast(client):
    body = client.get("/series").json()
    assert len(body["points"]) == 30
    assert body["forecastStartIndex"] == 30
    assert body["forecast"] is None
    # absent indicator fields are omitted, not zero
    assert "sma" not in body["points"][10]


def test_forecast_then_series_with_indicators(client):
    response = client.post("/forecast", json={"days": 5})
    assert response.status_code == 200
    body = response.json()
    assert body["forecastStartIndex"] == 30
    assert [p["date"] for p in body["points"][30:]] == [
        "2024-01-31",
        "2024-02-01",
        "2024-02-02",
        "2024-02-03",
        "2024-02-04",
    ]
    assert body["forecast"]["predictedHigh"] == 144.0

    series = client.get("/series", params={"sma": True, "sma_period": 5, "rsi": True}).json()
    assert len(series["points"]) == 35
    assert series["points"][4]["sma"] == 102.0
    assert series["points"][14]["rsi"] == 100
    assert series["rows"][29]["forecast"] == series["rows"][29]["historical"] == 129.0
    assert series["rows"][30]["historical"] is None


def test_series_date_window(client):
    client.post("/forecast", json={"days": 3})
    body = client.get("/series", params={"start": "2024-01-29", "end": "2024-02-01"}).json()
    assert [p["date"] for p in body["points"]] == [
        "2024-01-29",
        "2024-01-30",
        "2024-01-31",
        "2024-02-01",
    ]
    assert body["forecastStartIndex"] == 2


def test_inverted_window_is_empty(client):
    body = client.get("/series", params={"start": "2024-01-10", "end": "2024-01-05"}).json()
    assert body["points"] == [] and body["rows"] == []


@pytest.mark.parametrize("days", [2, 16])
def test_forecast_horizon_is_validated(client, days):
    assert client.post("/forecast", json={"days": days}).status_code == 422


def test_indicator_period_is_validated(client):
    assert client.get("/series", params={"sma": True, "sma_period": 1}).status_code == 422


def test_forecast_failure_is_reported(client, forecaster):
    forecaster.error = ForecastError("model unavailable")
    response = client.post("/forecast", json={"days": 7})
    assert response.status_code == 502
    assert "try again" in response.json()["detail"]


def test_delete_forecast(client):
    client.post("/forecast", json={"days": 3})
    assert client.delete("/forecast").json() == {"status": "cleared"}
    assert client.get("/series").json()["forecast"] is None


def test_refresh_history_drops_forecast(client, history_provider):
    client.post("/forecast", json={"days": 3})
    body = client.post("/history/refresh").json()
    assert len(body["points"]) == 30
    assert history_provider.calls == 2
    assert client.get("/series").json()["forecast"] is None


def test_forecast_without_history_is_unprocessable(forecaster):
    app = create_app(build_session(StaticHistoryProvider([]), forecaster, history_days=30))
    with TestClient(app) as client:
        response = client.post("/forecast", json={"days": 5})
    assert response.status_code == 422
    assert forecaster.calls == []


def test_unreachable_history_source(forecaster):
    provider = UnreachableHistoryProvider()
    app = create_app(build_session(provider, forecaster, history_days=30))
    # startup survives a failed load; the dashboard is simply empty
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert client.get("/series").json()["points"] == []

        response = client.post("/history/refresh")
        assert response.status_code == 502
        assert "unreachable" in response.json()["detail"]
    assert provider.calls == 2
