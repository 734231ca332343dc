import pytest

from conftest import StubForecaster, UnreachableHistoryProvider, make_result, make_series
from niftycast.application.services.series_assembler import assemble_forecast
from niftycast.domain.entities.series_point import ChartView
from niftycast.domain.ports.observability_port import NullObservabilityHandler
from niftycast.infrastructure.entrypoints import cli
from niftycast.infrastructure.entrypoints.cli import parse_args, render_table
from niftycast.infrastructure.entrypoints.composition import (
    build_history_provider,
    build_observability,
)
from niftycast.infrastructure.stock_data.mock_data_provider import RandomWalkDataProvider


def test_mock_source_is_default(monkeypatch):
    monkeypatch.delenv("HISTORY_SOURCE", raising=False)
    monkeypatch.setenv("MOCK_SEED", "3")
    assert isinstance(build_history_provider(), RandomWalkDataProvider)


def test_unknown_source_is_rejected():
    with pytest.raises(ValueError):
        build_history_provider("bloomberg")


def test_tracing_off_by_default(monkeypatch):
    monkeypatch.delenv("LANGFUSE_ENABLED", raising=False)
    assert isinstance(build_observability(), NullObservabilityHandler)


def test_cli_defaults():
    args = parse_args([])
    assert args.days == 7 and args.history == 30 and args.sma is None


@pytest.mark.parametrize("argv", [["--days", "2"], ["--days", "16"], ["--sma", "1"]])
def test_cli_rejects_out_of_range(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_render_table_marks_forecast_start():
    assembled = assemble_forecast(make_series([100, 101]), make_result([102.0]))
    view = ChartView(
        points=assembled.points,
        rows=[],
        forecast_start_index=assembled.forecast_start_index,
        forecast=assembled,
    )
    lines = render_table(view).splitlines()
    assert lines[3].endswith("forecast")
    assert lines[4].startswith("2024-01-03")
    assert lines[1].split()[2:] == ["-", "-", "-", "-", "-"]


def test_cli_reports_unreachable_history(monkeypatch, capsys):
    monkeypatch.setattr(cli, "build_history_provider", lambda source: UnreachableHistoryProvider())
    monkeypatch.setattr(cli, "build_forecaster", lambda observability: StubForecaster())
    monkeypatch.delenv("LANGFUSE_ENABLED", raising=False)

    assert cli.main(["--no-forecast"]) == 1
    assert "Could not load history" in capsys.readouterr().err
