"""
FastAPI entry point for the forecasting dashboard.

create_app() takes a ready DashboardSession so tests can inject fakes;
build_default_app() is the uvicorn factory that wires the real adapters from
environment configuration.

Run locally:
    uvicorn niftycast.infrastructure.entrypoints.fastapi_app:build_default_app --factory --reload --port 8000
"""

import dataclasses
import logging
import os
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from niftycast.application.services.dashboard_session import DashboardSession
from niftycast.application.services.indicator_engine import IndicatorSettings
from niftycast.domain.entities.series_point import AssembledSeries, ChartView
from niftycast.domain.errors import (
    ForecastError,
    ForecastInProgressError,
    HistoryUnavailableError,
    InsufficientHistoryError,
)
from niftycast.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)

MIN_FORECAST_DAYS = 3
MAX_FORECAST_DAYS = 15
MIN_INDICATOR_PERIOD = 2
MAX_INDICATOR_PERIOD = 100


class ForecastRequest(BaseModel):
    days: int = Field(7, ge=MIN_FORECAST_DAYS, le=MAX_FORECAST_DAYS)


def _forecast_summary(forecast: Optional[AssembledSeries]) -> Optional[dict]:
    if forecast is None:
        return None
    return {
        "summary": forecast.summary,
        "predictedHigh": forecast.predicted_high,
        "predictedLow": forecast.predicted_low,
        "percentageChange": forecast.percentage_change,
        "forecastStartDate": forecast.first_forecast_date,
        "days": len(forecast.forecast),
    }


def _serialize_view(view: ChartView) -> dict:
    return {
        "points": [p.to_dict() for p in view.points],
        "rows": [dataclasses.asdict(r) for r in view.rows],
        "forecastStartIndex": view.forecast_start_index,
        "forecast": _forecast_summary(view.forecast),
    }


def _serialize_assembled(assembled: AssembledSeries) -> dict:
    return {
        "points": [p.to_dict() for p in assembled.points],
        "forecastStartIndex": assembled.forecast_start_index,
        "forecast": _forecast_summary(assembled),
    }


def create_app(
    session: DashboardSession,
    observability: Optional[IObservabilityHandler] = None,
) -> FastAPI:
    """Build the API around *session*; history is loaded on startup."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            session.load_history()
        except (ValueError, HistoryUnavailableError) as exc:
            # serve anyway; POST /history/refresh retries the load
            logger.error("Initial history load failed: %s", exc)
        yield
        if observability is not None:
            observability.flush()

    app = FastAPI(title="NIFTY Forecast Dashboard API", lifespan=lifespan)

    @app.get("/series")
    def get_series(
        start: Optional[date] = None,
        end: Optional[date] = None,
        sma: bool = False,
        ema: bool = False,
        rsi: bool = False,
        sma_period: int = Query(20, ge=MIN_INDICATOR_PERIOD, le=MAX_INDICATOR_PERIOD),
        ema_period: int = Query(20, ge=MIN_INDICATOR_PERIOD, le=MAX_INDICATOR_PERIOD),
        rsi_period: int = Query(14, ge=MIN_INDICATOR_PERIOD, le=MAX_INDICATOR_PERIOD),
    ):
        """Combined historical + forecast series with optional indicators and date window."""
        settings = IndicatorSettings(
            show_sma=sma,
            sma_period=sma_period,
            show_ema=ema,
            ema_period=ema_period,
            show_rsi=rsi,
            rsi_period=rsi_period,
        )
        return _serialize_view(session.chart_view(settings, start, end))

    @app.post("/forecast")
    def create_forecast(body: ForecastRequest):
        """Generate a forecast of *days* steps and keep it for later /series calls."""
        try:
            assembled = session.generate_forecast(body.days)
        except ForecastInProgressError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except InsufficientHistoryError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except ForecastError as exc:
            logger.error("Forecast generation failed: %s", exc)
            raise HTTPException(
                status_code=502,
                detail=(
                    "Failed to generate forecast. The model might be temporarily "
                    "unavailable. Please try again later."
                ),
            ) from exc
        return _serialize_assembled(assembled)

    @app.delete("/forecast")
    def delete_forecast():
        session.clear_forecast()
        return {"status": "cleared"}

    @app.post("/history/refresh")
    def refresh_history():
        """Reload the historical series; any stored forecast is dropped."""
        try:
            points = session.load_history()
        except (ValueError, HistoryUnavailableError) as exc:
            logger.error("History refresh failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return {"points": [p.to_dict() for p in points]}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def build_default_app() -> FastAPI:
    """uvicorn factory: configure logging and wire the real adapters."""
    load_dotenv()

    from niftycast.infrastructure.entrypoints.composition import (
        build_forecaster,
        build_history_provider,
        build_observability,
        build_session,
        history_days_from_env,
    )
    from niftycast.infrastructure.logging_config import setup_logging

    setup_logging(os.environ.get("LOG_LEVEL"))
    observability = build_observability()
    session = build_session(
        build_history_provider(),
        build_forecaster(observability),
        history_days=history_days_from_env(),
    )
    return create_app(session, observability)
