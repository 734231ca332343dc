"""
Application service: restrict a combined series to a display window.
"""

from datetime import date, datetime, time
from typing import Optional, Union

from niftycast.domain.entities.series_point import FilteredView, SeriesPoint

DateLike = Union[date, datetime, str]


def _to_datetime(value: DateLike, at: time) -> datetime:
    """Normalize *value* to *at* on its calendar day, dropping any time of day."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, at)


def filter_by_date_range(
    points: list[SeriesPoint],
    start: DateLike,
    end: DateLike,
    first_forecast_date: Optional[str] = None,
) -> FilteredView:
    """Return the points dated within [start, end], both ends inclusive.

    *start* is moved to the start of its day and *end* to the end of its day.
    An inverted window yields an empty view rather than an error.

    The boundary index is recomputed for the filtered view: the position of
    the first point dated on or after *first_forecast_date*, or the filtered
    length when there is no forecast inside the window.
    """
    window_start = _to_datetime(start, time.min)
    window_end = _to_datetime(end, time.max)
    if window_start > window_end:
        return FilteredView(points=[], forecast_start_index=0)

    selected = [
        point
        for point in points
        if window_start <= _to_datetime(point.date, time.min) <= window_end
    ]

    boundary = len(selected)
    if first_forecast_date is not None:
        boundary = next(
            # ISO dates order lexically; a window opening mid-forecast still splits correctly
            (i for i, point in enumerate(selected) if point.date >= first_forecast_date),
            len(selected),
        )
    return FilteredView(points=selected, forecast_start_index=boundary)
