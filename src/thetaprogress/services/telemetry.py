"""Boundary to the remote event writer, which lives outside this package."""

from __future__ import annotations

from typing import Any, Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)


class TelemetrySink(Protocol):
    def log_event(self, event_type: str, **fields: Any) -> None:
        ...


class LoggingTelemetrySink:
    """Default sink: records events in the local log only."""

    def log_event(self, event_type: str, **fields: Any) -> None:
        logger.info(f"event {event_type}", extra={"event_type": event_type, "fields": fields})


def emit(sink: TelemetrySink | None, event_type: str, **fields: Any) -> None:
    """Send an event, never letting a sink failure reach the caller."""

    if sink is None:
        return
    try:
        sink.log_event(event_type, **fields)
    except Exception as exc:  # noqa: BLE001 - remote sinks may fail in any way
        logger.warning(f"Telemetry event {event_type} dropped: {exc}")


__all__ = ["LoggingTelemetrySink", "TelemetrySink", "emit"]
