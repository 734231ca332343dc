"""
Application service: technical indicators over an ordered price series.

Every function is pure: it returns a new list of equal length and date
alignment, with each point copied and optionally given the indicator field.
Indicators work positionally, so gaps between dates do not matter.

Short input is not an error. Points inside the warm-up window, or every point
when the series is too short, keep the field absent (None).
Clamping *period* to a sensible range is the caller's job.
"""

from dataclasses import dataclass, replace

from niftycast.domain.entities.series_point import SeriesPoint

# RSI of a run with neither gains nor losses (0/0 under the plain formula).
FLAT_RSI = 50.0


@dataclass(frozen=True)
class IndicatorSettings:
    show_sma: bool = False
    sma_period: int = 20
    show_ema: bool = False
    ema_period: int = 20
    show_rsi: bool = False
    rsi_period: int = 14


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be a positive integer, got {period!r}")


def calculate_sma(series: list[SeriesPoint], period: int) -> list[SeriesPoint]:
    """Simple moving average of *price* over a trailing window of *period* points."""
    _check_period(period)
    result = [replace(point, sma=None) for point in series]
    if len(series) < period:
        return result

    for i in range(period - 1, len(series)):
        window = series[i - period + 1 : i + 1]
        result[i] = replace(result[i], sma=sum(p.price for p in window) / period)
    return result


def calculate_ema(series: list[SeriesPoint], period: int) -> list[SeriesPoint]:
    """Exponential moving average seeded with the SMA of the first *period* prices.

    The seed sits at index period-1; each later value follows
    ema[i] = (price[i] - ema[i-1]) * k + ema[i-1] with k = 2 / (period + 1).
    """
    _check_period(period)
    result = [replace(point, ema=None) for point in series]
    if len(series) < period:
        return result

    multiplier = 2 / (period + 1)
    ema = sum(p.price for p in series[:period]) / period
    result[period - 1] = replace(result[period - 1], ema=ema)

    for i in range(period, len(series)):
        ema = (series[i].price - ema) * multiplier + ema
        result[i] = replace(result[i], ema=ema)
    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # Infinite relative strength; a run with no movement at all is neutral.
        return FLAT_RSI if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def calculate_rsi(series: list[SeriesPoint], period: int) -> list[SeriesPoint]:
    """Relative Strength Index with Wilder's smoothing.

    The first value is placed at index *period*, once *period* day-over-day
    changes have been seen; earlier points are left without an RSI.
    """
    _check_period(period)
    result = [replace(point, rsi=None) for point in series]
    if len(series) <= period:
        return result

    changes = [series[i].price - series[i - 1].price for i in range(1, len(series))]

    sum_gain = 0.0
    sum_loss = 0.0
    for change in changes[:period]:
        if change >= 0:
            sum_gain += change
        else:
            sum_loss -= change

    avg_gain = sum_gain / period
    avg_loss = sum_loss / period
    result[period] = replace(result[period], rsi=_rsi_value(avg_gain, avg_loss))

    for i in range(period, len(changes)):
        change = changes[i]
        gain = change if change >= 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        # changes[i] compares point i+1 with point i
        result[i + 1] = replace(result[i + 1], rsi=_rsi_value(avg_gain, avg_loss))
    return result


def apply_indicators(
    series: list[SeriesPoint], settings: IndicatorSettings
) -> list[SeriesPoint]:
    """Run every enabled indicator over *series*, SMA then EMA then RSI."""
    result = list(series)
    if settings.show_sma:
        result = calculate_sma(result, settings.sma_period)
    if settings.show_ema:
        result = calculate_ema(result, settings.ema_period)
    if settings.show_rsi:
        result = calculate_rsi(result, settings.rsi_period)
    return result
