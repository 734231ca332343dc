"""
Prompts for the price forecasting model.
Keeping the prompt in the application layer keeps it close to the business rules
it encodes (horizon, confidence band, response shape), while remaining
independent from any infrastructure SDK.
"""

import json

from niftycast.domain.entities.series_point import SeriesPoint

SYSTEM_PROMPT = """You are a financial analyst specialising in time series forecasting for Indian stock markets.

Guidelines:
1. Base every prediction only on the historical closing prices you are given.
2. For each forecast day give a point estimate and a 90% confidence interval
   (high and low) that brackets it: low <= price <= high.
3. Keep the summary to one paragraph: expected trend (bullish, bearish or
   sideways) and key price levels to watch.
4. Reply with a single raw JSON object. No introductory text, no explanations,
   no markdown formatting such as ```json.
"""

FORECAST_PROMPT_TEMPLATE = """Given the following daily closing prices for the NIFTY FIFTY index for the last {history_days} days, predict the closing prices for the next {days} days.

Historical Data:
{history_json}

Respond with a JSON object with these keys:
1. "forecast": an array of exactly {days} objects, one per day in order, each with
   "price" (predicted close), "high" and "low" (the 90% confidence bounds), all numbers.
2. "summary": a brief, one-paragraph analysis of the forecast.
3. "predictedHigh": the highest "high" across the forecast.
4. "predictedLow": the lowest "low" across the forecast.
5. "percentageChange": percentage change from the last historical price to the last forecast price.
"""


def build_forecast_prompt(series: list[SeriesPoint], days: int) -> str:
    """Render the user prompt for a *days*-step forecast of *series*."""
    history = [{"date": p.date, "price": p.price} for p in series]
    return FORECAST_PROMPT_TEMPLATE.format(
        history_days=len(series),
        days=days,
        history_json=json.dumps(history),
    )
