"""
Domain error taxonomy.
Indicator functions never raise for short input; they leave fields absent.
"""


class NiftycastError(Exception):
    """Base class for every error raised by the forecasting core."""


class ForecastError(NiftycastError):
    """The forecast collaborator failed or returned an incomplete payload."""


class MalformedForecastError(ForecastError):
    """A forecast payload failed shape or numeric sanity checks (e.g. low > high)."""


class ForecastInProgressError(ForecastError):
    """A forecast request is already outstanding."""


class InsufficientHistoryError(NiftycastError):
    """No historical points are available to anchor forecast dates."""


class HistoryUnavailableError(NiftycastError):
    """The historical data source could not be reached or returned nothing."""
