"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Every forecast model call is filed as one Langfuse trace named
``nifty-forecast``, tagged with the data source and carrying the request
horizon as metadata. Langfuse is imported lazily so the module loads without
LANGFUSE_* credentials; the composition root only builds this handler when
LANGFUSE_ENABLED is true.
"""

from typing import Any, Optional, Sequence

from niftycast.domain.ports.observability_port import IObservabilityHandler

TRACE_NAME = "nifty-forecast"


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Traces forecast model calls through the Langfuse LangChain CallbackHandler.

    Args:
        tags:    Extra Langfuse tags added after ``nifty-forecast``
                 (e.g. the history source).
        handler: Pre-built callback; defaults to langfuse's CallbackHandler.
    """

    def __init__(self, tags: Sequence[str] = (), handler: Optional[Any] = None) -> None:
        if handler is None:
            from langfuse.langchain import CallbackHandler
            handler = CallbackHandler()
        self._handler = handler
        self._tags = [TRACE_NAME, *tags]

    def run_config(self, **metadata: Any) -> Optional[dict]:
        return {
            "callbacks": [self._handler],
            "run_name": TRACE_NAME,
            "metadata": {"langfuse_tags": list(self._tags), **metadata},
        }

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()
