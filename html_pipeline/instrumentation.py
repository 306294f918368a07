"""
Instrumentation services for pipeline runs.

A service is any object with ``publish(event, payload)``. Pipelines default to
NullInstrumentation, which drops everything. SignalInstrumentation forwards
events to the Django signals in ``html_pipeline.signals``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .signals import SIGNALS_BY_EVENT

logger = logging.getLogger(__name__)

BEFORE_PIPELINE = "before_pipeline"
AFTER_PIPELINE = "after_pipeline"
BEFORE_FILTER = "before_filter"
AFTER_FILTER = "after_filter"


class InstrumentationService(Protocol):
    def publish(self, event: str, payload: dict[str, Any]) -> None: ...


class NullInstrumentation:
    """Drops all events."""

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        pass


class SignalInstrumentation:
    """Send each event through the matching Django signal."""

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        signal = SIGNALS_BY_EVENT.get(event)
        if signal is None:
            logger.debug(f"No signal for instrumentation event '{event}'")
            return

        responses = signal.send_robust(sender=payload.get("pipeline"), **payload)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.warning(
                    f"Receiver {receiver!r} failed for '{event}': {response}",
                    exc_info=response,
                )
