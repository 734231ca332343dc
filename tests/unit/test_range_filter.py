from datetime import date, datetime

from conftest import make_result, make_series
from niftycast.application.services.range_filter import filter_by_date_range
from niftycast.application.services.series_assembler import assemble_forecast


def _assembled():
    # history 2024-01-01 .. 2024-01-10, forecast 2024-01-11 .. 2024-01-15
    return assemble_forecast(make_series(range(100, 110)), make_result([110, 111, 112, 113, 114]))


def test_full_range_returns_sequence_unchanged():
    assembled = _assembled()
    view = filter_by_date_range(
        assembled.points, "2024-01-01", "2024-01-15", assembled.first_forecast_date
    )
    assert view.points == assembled.points
    assert view.forecast_start_index == assembled.forecast_start_index


def test_inverted_window_is_empty():
    view = filter_by_date_range(make_series(range(10)), "2024-01-05", "2024-01-02")
    assert view.points == []
    assert view.forecast_start_index == 0


def test_window_outside_data_is_empty():
    view = filter_by_date_range(make_series(range(10)), "2025-01-01", "2025-02-01")
    assert view.points == []


def test_bounds_are_inclusive_at_day_granularity():
    series = make_series(range(10))
    view = filter_by_date_range(
        series, datetime(2024, 1, 3, 18, 30), datetime(2024, 1, 5, 0, 0)
    )
    assert [p.date for p in view.points] == ["2024-01-03", "2024-01-04", "2024-01-05"]
    same_day = filter_by_date_range(series, date(2024, 1, 4), date(2024, 1, 4))
    assert [p.date for p in same_day.points] == ["2024-01-04"]


def test_boundary_recomputed_for_partial_window():
    assembled = _assembled()
    view = filter_by_date_range(
        assembled.points, "2024-01-08", "2024-01-12", assembled.first_forecast_date
    )
    assert [p.date for p in view.points] == [
        "2024-01-08",
        "2024-01-09",
        "2024-01-10",
        "2024-01-11",
        "2024-01-12",
    ]
    assert view.forecast_start_index == 3


def test_boundary_is_length_when_forecast_filtered_out():
    assembled = _assembled()
    view = filter_by_date_range(
        assembled.points, "2024-01-02", "2024-01-06", assembled.first_forecast_date
    )
    assert view.forecast_start_index == len(view.points) == 5


def test_window_starting_inside_forecast():
    assembled = _assembled()
    view = filter_by_date_range(
        assembled.points, "2024-01-13", "2024-01-20", assembled.first_forecast_date
    )
    assert len(view.points) == 3
    assert view.forecast_start_index == 0
