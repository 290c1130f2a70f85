"""Submission Lifecycle Controller.

State machine driving one form's submissions:

    idle -> submitting -> success -> (after reset delay) idle
                       -> error   -> submitting (on explicit resubmit)

Only one submission may be in flight. The success -> idle transition is
a timer owned by the controller and cancelled by close().
"""

import asyncio
import logging
from typing import Callable, Optional

from contracts import SubmissionSnapshot, SubmissionStatus, ValidationResult
from form.store import FormStore
from orchestrator.sink import SubmissionSink, as_sink_error, get_sink
from config import settings


logger = logging.getLogger(__name__)


SUCCESS_MESSAGE = (
    "Thank you for applying to GAESEE. Our team will review your application "
    "within 2-3 business days. You'll receive an email confirmation shortly."
)

StatusListener = Callable[[SubmissionStatus], None]


class SubmissionController:
    """Drives idle -> submitting -> success/error for one FormStore.

    Responsibilities:
    - Validate the whole form and surface every error on a rejected submit
    - Dispatch an immutable snapshot to the sink, at most once per submit
    - Schedule the automatic reset after success, cancelable on teardown
    """

    def __init__(
        self,
        store: FormStore,
        sink: Optional[SubmissionSink] = None,
        reset_delay_seconds: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        on_status_change: Optional[StatusListener] = None,
    ):
        """Initialize the controller.

        Args:
            store: Form whose values are submitted
            sink: Destination of snapshots (default: get_sink())
            reset_delay_seconds: Success display time before reset (default: settings)
            timeout_seconds: Maximum wait for the sink (default: settings)
            on_status_change: Called with the new status after every transition
        """
        self.store = store
        self.sink = sink or get_sink()
        self.reset_delay_seconds = (
            settings.success_reset_delay_seconds if reset_delay_seconds is None else reset_delay_seconds
        )
        self.timeout_seconds = settings.sink_timeout_seconds if timeout_seconds is None else timeout_seconds
        self.on_status_change = on_status_change

        self._status = SubmissionStatus.IDLE
        self._reset_handle: Optional[asyncio.TimerHandle] = None
        self._closed = False
        self.last_error: Optional[str] = None
        self.last_result: Optional[ValidationResult] = None
        self.last_snapshot: Optional[SubmissionSnapshot] = None

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def is_submit_disabled(self) -> bool:
        """The submit control is disabled while a submission is in flight."""
        return self._status == SubmissionStatus.SUBMITTING

    @property
    def reset_pending(self) -> bool:
        return self._reset_handle is not None

    async def submit(self) -> SubmissionStatus:
        """Validate and, if valid, dispatch the form to the sink.

        Returns:
            The status after this call completes
        """
        if self._closed:
            raise RuntimeError("SubmissionController is closed")
        if self._status in (SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCESS):
            logger.warning("submit() ignored while %s", self._status.value)
            return self._status

        self.store.touch_all()
        self.last_result = self.store.validate_all()
        if not self.last_result.is_valid:
            logger.info(
                "Submission rejected: %d invalid field(s): %s",
                len(self.last_result.errors),
                ", ".join(self.last_result.errors),
            )
            return self._status

        snapshot = self.store.snapshot()
        self.last_snapshot = snapshot
        self.last_error = None
        self._transition(SubmissionStatus.SUBMITTING)

        try:
            await asyncio.wait_for(
                self.sink.submit(dict(snapshot.values), snapshot.attachment),
                timeout=self.timeout_seconds,
            )
        except asyncio.CancelledError:
            self.last_error = "Submission cancelled"
            logger.warning("Submission to %s sink cancelled", self.sink.name)
            self._transition(SubmissionStatus.ERROR)
            raise
        except Exception as e:
            error = as_sink_error(e, self.timeout_seconds)
            self.last_error = str(error)
            logger.warning("Submission to %s sink failed: %s", self.sink.name, error)
            self._transition(SubmissionStatus.ERROR)
            return self._status

        self._transition(SubmissionStatus.SUCCESS)
        if not self._closed:
            loop = asyncio.get_running_loop()
            self._reset_handle = loop.call_later(self.reset_delay_seconds, self._auto_reset)
        return self._status

    def close(self) -> None:
        """Tear down: cancel any pending automatic reset."""
        self._closed = True
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
            logger.debug("Pending reset cancelled")

    def _auto_reset(self) -> None:
        self._reset_handle = None
        if self._closed:
            return
        self.store.reset()
        logger.info("Form reset after successful submission")
        self._transition(SubmissionStatus.IDLE)

    def _transition(self, status: SubmissionStatus) -> None:
        logger.info("Submission %s -> %s", self._status.value, status.value)
        self._status = status
        if self.on_status_change is not None:
            self.on_status_change(status)

