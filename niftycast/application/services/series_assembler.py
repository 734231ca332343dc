"""
Application service: merge historical and forecast segments into one series.

Business decisions owned here:
  - Forecast dates are re-derived from the last historical date with plain
    calendar-day increments; whatever dates the model produced are ignored.
  - Summary metrics declared by the forecast collaborator are passed through
    as given; they are only derived when the collaborator left them out.
"""

import logging
import math
from datetime import date, timedelta
from typing import Optional

from niftycast.domain.entities.series_point import (
    AssembledSeries,
    ChartRow,
    ForecastResult,
    ForecastStep,
    SeriesPoint,
)
from niftycast.domain.errors import InsufficientHistoryError, MalformedForecastError

logger = logging.getLogger(__name__)


def forecast_dates(last_date: str, days: int) -> list[str]:
    """Return the *days* calendar dates following *last_date* (YYYY-MM-DD)."""
    anchor = date.fromisoformat(last_date)
    return [(anchor + timedelta(days=k + 1)).isoformat() for k in range(days)]


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_forecast(result: ForecastResult) -> None:
    """Check the raw forecast shape and its confidence bands.

    Raises:
        MalformedForecastError: if *forecast* is not a list, a step is missing
                                a finite numeric price/high/low, low > high,
                                or the price falls outside [low, high].
    """
    steps = getattr(result, "forecast", None)
    if not isinstance(steps, list):
        raise MalformedForecastError("forecast must be a list of steps")
    for index, step in enumerate(steps):
        if not isinstance(step, ForecastStep):
            raise MalformedForecastError(f"forecast step {index} is not a ForecastStep")
        for name in ("price", "high", "low"):
            if not _is_number(getattr(step, name)):
                raise MalformedForecastError(
                    f"forecast step {index} has a non-numeric {name}: {getattr(step, name)!r}"
                )
        if step.low > step.high:
            raise MalformedForecastError(
                f"forecast step {index} has low {step.low} above high {step.high}"
            )
        if not step.low <= step.price <= step.high:
            raise MalformedForecastError(
                f"forecast step {index} price {step.price} lies outside "
                f"[{step.low}, {step.high}]"
            )


def _percentage_change(last_historical: float, last_forecast: float) -> Optional[float]:
    if last_historical == 0:
        return None
    return (last_forecast - last_historical) / last_historical * 100


def assemble_forecast(
    historical: list[SeriesPoint], result: ForecastResult
) -> AssembledSeries:
    """Date-stamp the forecast steps and append them to *historical*.

    Args:
        historical: Authoritative historical points, oldest first. Not modified.
        result:     Raw forecast from the collaborator (steps carry no date).

    Returns:
        AssembledSeries whose forecast_start_index equals len(historical).

    Raises:
        InsufficientHistoryError: if *historical* is empty.
        MalformedForecastError:   if the forecast fails validation.
    """
    if not historical:
        raise InsufficientHistoryError("cannot anchor forecast dates without history")
    validate_forecast(result)

    steps = result.forecast
    dates = forecast_dates(historical[-1].date, len(steps))
    projected = [
        SeriesPoint(date=d, price=step.price, high=step.high, low=step.low)
        for d, step in zip(dates, steps)
    ]

    predicted_high = result.predicted_high
    predicted_low = result.predicted_low
    percentage_change = result.percentage_change
    if steps:
        if predicted_high is None:
            predicted_high = max(step.high for step in steps)
        if predicted_low is None:
            predicted_low = min(step.low for step in steps)
        if percentage_change is None:
            percentage_change = _percentage_change(historical[-1].price, steps[-1].price)

    logger.debug(
        "Assembled %d historical + %d forecast points (%s .. %s)",
        len(historical),
        len(projected),
        dates[0] if dates else "-",
        dates[-1] if dates else "-",
    )
    return AssembledSeries(
        points=list(historical) + projected,
        forecast_start_index=len(historical),
        summary=result.summary,
        predicted_high=predicted_high,
        predicted_low=predicted_low,
        percentage_change=percentage_change,
    )


def build_chart_rows(points: list[SeriesPoint], forecast_start_index: int) -> list[ChartRow]:
    """Split prices into historical/forecast columns for a two-line chart.

    When a forecast follows, the last historical row also fills the forecast
    column so the projected line is drawn from the last actual price.
    """
    has_forecast = forecast_start_index < len(points)
    rows: list[ChartRow] = []
    for i, point in enumerate(points):
        is_historical = i < forecast_start_index
        bridge = has_forecast and i == forecast_start_index - 1
        rows.append(
            ChartRow(
                date=point.date,
                historical=point.price if is_historical else None,
                forecast=point.price if (not is_historical or bridge) else None,
                high=point.high,
                low=point.low,
                sma=point.sma,
                ema=point.ema,
                rsi=point.rsi,
            )
        )
    return rows
