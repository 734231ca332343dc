"""
Domain entities for the price series shown on the dashboard.
Zero external dependencies: pure Python dataclasses only.

Optional fields use None to mean "not computed". Consumers must test for
presence before using a value; a missing indicator is never zero.
"""

from dataclasses import dataclass, field
from typing import Optional

_OPTIONAL_FIELDS = ("high", "low", "sma", "ema", "rsi")


@dataclass(frozen=True)
class SeriesPoint:
    date: str
    price: float
    high: Optional[float] = None
    low: Optional[float] = None
    sma: Optional[float] = None
    ema: Optional[float] = None
    rsi: Optional[float] = None

    def to_dict(self) -> dict:
        """Serialize the point, leaving out every optional field that is absent."""
        data = {"date": self.date, "price": self.price}
        for name in _OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


@dataclass(frozen=True)
class ForecastStep:
    """One raw forecast step as returned by the model; it carries no date."""

    price: float
    high: float
    low: float


@dataclass(frozen=True)
class ForecastResult:
    forecast: list[ForecastStep]
    summary: str
    predicted_high: Optional[float] = None
    predicted_low: Optional[float] = None
    percentage_change: Optional[float] = None


@dataclass(frozen=True)
class AssembledSeries:
    """Historical and forecast points merged into one chartable sequence.

    forecast_start_index: position of the first projected point; equals the
                          number of historical points.
    """

    points: list[SeriesPoint]
    forecast_start_index: int
    summary: str = ""
    predicted_high: Optional[float] = None
    predicted_low: Optional[float] = None
    percentage_change: Optional[float] = None

    @property
    def historical(self) -> list[SeriesPoint]:
        return self.points[: self.forecast_start_index]

    @property
    def forecast(self) -> list[SeriesPoint]:
        return self.points[self.forecast_start_index :]

    @property
    def first_forecast_date(self) -> Optional[str]:
        if self.forecast_start_index < len(self.points):
            return self.points[self.forecast_start_index].date
        return None


@dataclass(frozen=True)
class FilteredView:
    points: list[SeriesPoint] = field(default_factory=list)
    forecast_start_index: int = 0


@dataclass(frozen=True)
class ChartRow:
    """A display row: historical and forecast prices live in separate columns.

    The last historical row repeats its price in *forecast* so the projected
    line starts where the actual line ends.
    """

    date: str
    historical: Optional[float]
    forecast: Optional[float]
    high: Optional[float] = None
    low: Optional[float] = None
    sma: Optional[float] = None
    ema: Optional[float] = None
    rsi: Optional[float] = None


@dataclass(frozen=True)
class ChartView:
    """Everything the dashboard needs to draw one chart."""

    points: list[SeriesPoint]
    rows: list[ChartRow]
    forecast_start_index: int
    forecast: Optional[AssembledSeries] = None
