"""
Infrastructure adapter: language model -> IForecaster.

Builds the forecast prompt, invokes an injected ILanguageModel and turns the
raw JSON reply into a ForecastResult. Response parsing and schema checks live
here so the application layer never sees the wire format. Every failure,
including transport errors and timeouts raised by the model adapter, is
surfaced as a single ForecastError.
"""

import json
import logging
import re
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from niftycast.application.forecasting.prompts import SYSTEM_PROMPT, build_forecast_prompt
from niftycast.domain.entities.series_point import ForecastResult, ForecastStep, SeriesPoint
from niftycast.domain.errors import ForecastError
from niftycast.domain.ports.forecaster_port import IForecaster
from niftycast.domain.ports.llm_port import ILanguageModel
from niftycast.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


class ForecastStepPayload(BaseModel):
    model_config = ConfigDict(strict=True)

    price: float
    high: float
    low: float


class ForecastPayload(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    forecast: list[ForecastStepPayload]
    summary: str
    predicted_high: float = Field(alias="predictedHigh")
    predicted_low: float = Field(alias="predictedLow")
    percentage_change: float = Field(alias="percentageChange")


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # Converse-style content blocks
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    raise ForecastError(f"unexpected model response type: {type(content).__name__}")


def parse_forecast_response(text: str, days: int) -> ForecastResult:
    """Parse the raw model reply into a ForecastResult.

    Raises:
        ForecastError: if the reply is not JSON, misses required keys, has
                       wrong types, or holds a horizon other than *days*.
    """
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)
    try:
        payload = ForecastPayload.model_validate(json.loads(text))
    except json.JSONDecodeError as exc:
        raise ForecastError(f"forecast response is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ForecastError(f"forecast response has an invalid structure: {exc}") from exc

    if len(payload.forecast) != days:
        raise ForecastError(
            f"forecast response holds {len(payload.forecast)} steps, expected {days}"
        )
    return ForecastResult(
        forecast=[ForecastStep(price=s.price, high=s.high, low=s.low) for s in payload.forecast],
        summary=payload.summary,
        predicted_high=payload.predicted_high,
        predicted_low=payload.predicted_low,
        percentage_change=payload.percentage_change,
    )


class LLMForecaster(IForecaster):
    """Asks a chat model for a forecast with 90% confidence bands."""

    def __init__(
        self,
        llm: ILanguageModel,
        observability: Optional[IObservabilityHandler] = None,
    ) -> None:
        self._llm = llm
        self._observability = observability

    def forecast(self, series: list[SeriesPoint], days: int) -> ForecastResult:
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=build_forecast_prompt(series, days)),
        ]
        try:
            response = self._llm.invoke(messages, config=self._config(series, days))
        except Exception as exc:
            logger.error("Forecast model call failed: %s", exc)
            raise ForecastError("failed to get a forecast from the model") from exc

        text = _message_text(response)
        logger.debug("Raw forecast response: %s", text)
        try:
            return parse_forecast_response(text, days)
        except ForecastError as exc:
            logger.warning("Rejected forecast response: %s", exc)
            raise

    def _config(self, series: list[SeriesPoint], days: int) -> Optional[dict]:
        if self._observability is None:
            return None
        return self._observability.run_config(
            forecast_days=days,
            history_points=len(series),
            last_history_date=series[-1].date if series else None,
        )
