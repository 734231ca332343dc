"""
Port (interface) for observability / tracing handlers.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IObservabilityHandler(ABC):
    @abstractmethod
    def run_config(self, **metadata: Any) -> Optional[dict]:
        """Return the LangChain run config for one traced model call.

        *metadata* is attached to the trace. None means the call is not traced.
        """
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...


class NullObservabilityHandler(IObservabilityHandler):
    """No-op handler used when tracing is disabled."""

    def run_config(self, **metadata: Any) -> Optional[dict]:
        return None

    def flush(self) -> None:
        return None
