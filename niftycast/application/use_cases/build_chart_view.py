"""
Use-case: turn historical data and an optional forecast into a chart view.
Depends only on application services and domain entities.

Indicators run over the combined historical + forecast series, so the
averages carry on into the projected segment; the date window is applied
afterwards.
"""

from typing import Optional

from niftycast.application.services.indicator_engine import (
    IndicatorSettings,
    apply_indicators,
)
from niftycast.application.services.range_filter import DateLike, filter_by_date_range
from niftycast.application.services.series_assembler import build_chart_rows
from niftycast.domain.entities.series_point import AssembledSeries, ChartView, SeriesPoint


class BuildChartViewUseCase:
    def execute(
        self,
        historical: list[SeriesPoint],
        forecast: Optional[AssembledSeries] = None,
        settings: Optional[IndicatorSettings] = None,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> ChartView:
        """Build the view.

        Args:
            historical: Historical points; ignored in favour of
                        forecast.points when a forecast is given.
            forecast:   Assembled forecast, if one has been generated.
            settings:   Which indicators to overlay. None means no indicators.
            start, end: Inclusive date window. A missing bound defaults to
                        the first / last date of the combined series.
        """
        if forecast is not None:
            combined = forecast.points
            first_forecast_date = forecast.first_forecast_date
        else:
            combined = list(historical)
            first_forecast_date = None

        if settings is not None:
            combined = apply_indicators(combined, settings)

        if not combined:
            return ChartView(points=[], rows=[], forecast_start_index=0, forecast=forecast)

        view = filter_by_date_range(
            combined,
            start if start is not None else combined[0].date,
            end if end is not None else combined[-1].date,
            first_forecast_date=first_forecast_date,
        )
        return ChartView(
            points=view.points,
            rows=build_chart_rows(view.points, view.forecast_start_index),
            forecast_start_index=view.forecast_start_index,
            forecast=forecast,
        )
