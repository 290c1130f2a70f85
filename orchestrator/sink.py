"""Submission sinks - where a validated snapshot is sent.

The engine only knows the abstract SubmissionSink. SimulatedSink mirrors
the artificial latency of the registration page; RecordingSink keeps what it
receives in memory.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Type

from contracts import FileMeta, SinkError
from config import settings


logger = logging.getLogger(__name__)


class SubmissionSink(ABC):
    """Abstract base class for submission sinks."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Sink name (simulated, recording)."""
        pass

    @abstractmethod
    async def submit(self, values: Mapping[str, Any], attachment: Optional[FileMeta]) -> None:
        """Accept one snapshot.

        Args:
            values: Field values keyed by field key
            attachment: Metadata of the uploaded file, if any

        Raises:
            SinkError: if the snapshot could not be accepted
        """
        pass


class SimulatedSink(SubmissionSink):
    """Waits a fixed delay, logs the snapshot and always succeeds."""

    def __init__(self, delay_seconds: Optional[float] = None):
        self.delay_seconds = (
            settings.simulated_sink_delay_seconds if delay_seconds is None else delay_seconds
        )

    @property
    def name(self) -> str:
        return "simulated"

    async def submit(self, values: Mapping[str, Any], attachment: Optional[FileMeta]) -> None:
        await asyncio.sleep(self.delay_seconds)
        logger.info("Form submitted: %d fields, attachment=%s", len(values), attachment.name if attachment else None)


@dataclass
class SinkCall:
    """One call received by a RecordingSink."""
    values: Dict[str, Any]
    attachment: Optional[FileMeta]
    received_at: datetime = field(default_factory=datetime.now)


class RecordingSink(SubmissionSink):
    """Keeps every received snapshot; optionally fails or stalls on demand."""

    def __init__(self, error: Optional[Exception] = None, delay_seconds: float = 0.0):
        """Initialize the sink.

        Args:
            error: Raised from submit() after recording the call, if given
            delay_seconds: Latency before the call completes
        """
        self.error = error
        self.delay_seconds = delay_seconds
        self.calls: List[SinkCall] = []

    @property
    def name(self) -> str:
        return "recording"

    async def submit(self, values: Mapping[str, Any], attachment: Optional[FileMeta]) -> None:
        self.calls.append(SinkCall(values=dict(values), attachment=attachment))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error


# Registry of available sinks
SINKS: Dict[str, Type[SubmissionSink]] = {
    "simulated": SimulatedSink,
    "recording": RecordingSink,
}


def get_sink(sink_name: Optional[str] = None) -> SubmissionSink:
    """Get a sink instance by name (default: settings.default_sink)."""
    key = (sink_name or settings.default_sink).lower()
    if key not in SINKS:
        raise ValueError(
            f"Unknown sink: {sink_name}. "
            f"Available: {list(SINKS.keys())}"
        )
    return SINKS[key]()


def list_sinks() -> List[str]:
    return list(SINKS.keys())


def as_sink_error(exc: BaseException, timeout_seconds: Optional[float] = None) -> SinkError:
    """Wrap any sink failure as a SinkError."""
    if isinstance(exc, SinkError):
        return exc
    if isinstance(exc, asyncio.TimeoutError):
        timeout = settings.sink_timeout_seconds if timeout_seconds is None else timeout_seconds
        return SinkError(f"Submission timed out after {timeout:g}s")
    return SinkError(str(exc) or exc.__class__.__name__)
