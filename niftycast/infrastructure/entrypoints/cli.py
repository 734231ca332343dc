"""
CLI entry point: print the historical series, a forecast and indicators.

This script is a Composition Root like the HTTP app: it wires the configured
adapters to a DashboardSession and prints the combined table.

    export AWS_PROFILE=<your-profile>
    python -m niftycast.infrastructure.entrypoints.cli --days 7 --sma 5 --rsi 14
"""

import argparse
import os
import sys

from dotenv import load_dotenv

from niftycast.application.services.indicator_engine import IndicatorSettings
from niftycast.domain.entities.series_point import ChartView
from niftycast.domain.errors import NiftycastError
from niftycast.infrastructure.entrypoints.composition import (
    build_forecaster,
    build_history_provider,
    build_observability,
    build_session,
)
from niftycast.infrastructure.logging_config import setup_logging


def _fmt(value) -> str:
    return f"{value:>10.2f}" if value is not None else f"{'-':>10}"


def render_table(view: ChartView) -> str:
    lines = [
        f"{'date':<12}{'price':>10}{'low':>10}{'high':>10}{'sma':>10}{'ema':>10}{'rsi':>10}"
    ]
    for i, p in enumerate(view.points):
        if i == view.forecast_start_index:
            lines.append("-" * 72 + " forecast")
        lines.append(
            f"{p.date:<12}{_fmt(p.price)}{_fmt(p.low)}{_fmt(p.high)}"
            f"{_fmt(p.sma)}{_fmt(p.ema)}{_fmt(p.rsi)}"
        )
    return "\n".join(lines)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="NIFTY FIFTY forecast from the command line.")
    parser.add_argument("--days", type=int, default=7, help="forecast horizon (3-15)")
    parser.add_argument("--history", type=int, default=30, help="historical days to load")
    parser.add_argument("--source", choices=["mock", "yfinance"], default=None)
    parser.add_argument("--sma", type=int, default=None, metavar="PERIOD")
    parser.add_argument("--ema", type=int, default=None, metavar="PERIOD")
    parser.add_argument("--rsi", type=int, default=None, metavar="PERIOD")
    parser.add_argument("--no-forecast", action="store_true", help="show history only")
    args = parser.parse_args(argv)
    if not 3 <= args.days <= 15:
        parser.error("--days must be between 3 and 15")
    for name in ("sma", "ema", "rsi"):
        period = getattr(args, name)
        if period is not None and not 2 <= period <= 100:
            parser.error(f"--{name} must be between 2 and 100")
    return args


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_logging(os.environ.get("LOG_LEVEL", "WARNING"))
    args = parse_args(argv)

    observability = build_observability()
    session = build_session(
        build_history_provider(args.source),
        build_forecaster(observability),
        history_days=args.history,
    )
    try:
        session.load_history()
    except (ValueError, NiftycastError) as exc:
        print(f"Could not load history: {exc}", file=sys.stderr)
        return 1

    if not args.no_forecast:
        try:
            session.generate_forecast(args.days)
        except NiftycastError as exc:
            print(f"Forecast failed: {exc}", file=sys.stderr)
            return 1
        finally:
            observability.flush()

    settings = IndicatorSettings(
        show_sma=args.sma is not None,
        sma_period=args.sma or 20,
        show_ema=args.ema is not None,
        ema_period=args.ema or 20,
        show_rsi=args.rsi is not None,
        rsi_period=args.rsi or 14,
    )
    view = session.chart_view(settings)
    print(render_table(view))

    if view.forecast is not None:
        fc = view.forecast
        print(f"\nPredicted high: {_fmt(fc.predicted_high).strip()}")
        print(f"Predicted low:  {_fmt(fc.predicted_low).strip()}")
        if fc.percentage_change is not None:
            print(f"Change:         {fc.percentage_change:+.2f}%")
        print(f"\n{fc.summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
