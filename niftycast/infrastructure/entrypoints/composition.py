"""
Composition Root: wires infrastructure adapters into the application layer.

This is the only place that reads process configuration. Everything below it
receives its collaborators as constructor arguments.
"""

import logging
import os

from niftycast.application.services.dashboard_session import DashboardSession
from niftycast.application.use_cases.generate_forecast import GenerateForecastUseCase
from niftycast.application.use_cases.get_historical_series import GetHistoricalSeriesUseCase
from niftycast.domain.ports.forecaster_port import IForecaster
from niftycast.domain.ports.historical_data_port import IHistoricalDataProvider
from niftycast.domain.ports.observability_port import (
    IObservabilityHandler,
    NullObservabilityHandler,
)

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_history_provider(source: str | None = None) -> IHistoricalDataProvider:
    """Return the provider named by *source* or HISTORY_SOURCE ('mock' or 'yfinance')."""
    source = (source or os.environ.get("HISTORY_SOURCE", "mock")).lower()
    if source == "yfinance":
        from niftycast.infrastructure.stock_data.yfinance_adapter import (
            YFinanceHistoricalDataProvider,
        )
        return YFinanceHistoricalDataProvider(
            symbol=os.environ.get("HISTORY_SYMBOL", YFinanceHistoricalDataProvider.DEFAULT_SYMBOL)
        )
    if source == "mock":
        from niftycast.infrastructure.stock_data.mock_data_provider import RandomWalkDataProvider
        seed = os.environ.get("MOCK_SEED")
        return RandomWalkDataProvider(seed=int(seed) if seed else None)
    raise ValueError(f"Unknown HISTORY_SOURCE: {source!r} (expected 'mock' or 'yfinance')")


def build_observability() -> IObservabilityHandler:
    if _env_flag("LANGFUSE_ENABLED"):
        from niftycast.infrastructure.observability.langfuse_adapter import (
            LangfuseObservabilityHandler,
        )
        return LangfuseObservabilityHandler(tags=[os.environ.get("HISTORY_SOURCE", "mock").lower()])
    return NullObservabilityHandler()


def build_forecaster(observability: IObservabilityHandler | None = None) -> IForecaster:
    from niftycast.infrastructure.forecasting.llm_forecaster import LLMForecaster
    from niftycast.infrastructure.llm.bedrock_adapter import BedrockChatAdapter

    llm = BedrockChatAdapter(
        model_id=os.environ.get("FORECAST_MODEL_ID") or None,
        temperature=float(os.environ.get("FORECAST_TEMPERATURE", "0.5")),
        timeout_seconds=float(os.environ.get("FORECAST_TIMEOUT_SECONDS", "60")),
    )
    return LLMForecaster(llm, observability)


def build_session(
    history_provider: IHistoricalDataProvider,
    forecaster: IForecaster,
    history_days: int = 30,
) -> DashboardSession:
    return DashboardSession(
        history_uc=GetHistoricalSeriesUseCase(history_provider),
        forecast_uc=GenerateForecastUseCase(forecaster),
        history_days=history_days,
    )


def history_days_from_env() -> int:
    return int(os.environ.get("HISTORY_DAYS", "30"))
