"""Progress events sent from the export pipeline to its host.

A run reports milestones as ``ProgressEvent`` values. The pipeline never talks
to a reporter directly: it goes through ``ProgressChannel``, which logs every
event and decides what a delivery failure means. By default delivery is best
effort, so a closed window or a full queue cannot abort an export that would
otherwise succeed. ``strict=True`` turns any delivery failure into
``EventDeliveryError``.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from .errors import EventDeliveryError

LOGGER = logging.getLogger(__name__)


class EventType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    EventType.INFO: logging.INFO,
    EventType.SUCCESS: logging.INFO,
    EventType.WARNING: logging.WARNING,
    EventType.ERROR: logging.ERROR,
}


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    message: str
    type: EventType = EventType.INFO

    def to_payload(self) -> dict[str, str]:
        return {"message": self.message, "type": self.type.value}


class ProgressReporter(Protocol):
    """Anything able to receive progress events."""

    def emit(self, event: ProgressEvent) -> None:  # pragma: no cover - interface definition
        ...


class CallbackReporter:
    """Adapts a plain callable to the reporter protocol."""

    def __init__(self, callback: Callable[[ProgressEvent], None]) -> None:
        self.callback = callback

    def emit(self, event: ProgressEvent) -> None:
        self.callback(event)


class QueueReporter:
    """Bounded queue consumed by a UI thread.

    ``emit`` never blocks; when the queue is full the event is dropped and
    counted.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        self.queue: queue.Queue[ProgressEvent] = queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def emit(self, event: ProgressEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except queue.Full:
            self.dropped += 1

    def drain(self) -> list[ProgressEvent]:
        events: list[ProgressEvent] = []
        while True:
            try:
                events.append(self.queue.get_nowait())
            except queue.Empty:
                return events


class ProgressChannel:
    """Logs and forwards events for a single export run."""

    def __init__(
        self,
        reporter: ProgressReporter | None = None,
        *,
        strict: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self.reporter = reporter
        self.strict = strict
        self.logger = logger or LOGGER
        self.failed_deliveries = 0

    def emit(self, message: str, type: EventType = EventType.INFO) -> None:
        event = ProgressEvent(message=message, type=type)
        self.logger.log(_LOG_LEVELS[type], "%s", message)
        if self.reporter is None:
            return
        try:
            self.reporter.emit(event)
        except Exception as exc:  # noqa: BLE001 - any reporter failure is a delivery failure
            if self.strict:
                raise EventDeliveryError(f"发送进度事件失败: {exc}") from exc
            self.failed_deliveries += 1
            self.logger.warning("progress delivery failed (%s): %s", type.value, exc)

    def info(self, message: str) -> None:
        self.emit(message, EventType.INFO)

    def success(self, message: str) -> None:
        self.emit(message, EventType.SUCCESS)

    def warning(self, message: str) -> None:
        self.emit(message, EventType.WARNING)

    def error(self, message: str) -> None:
        self.emit(message, EventType.ERROR)
