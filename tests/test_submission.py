"""Tests for the Submission Lifecycle Controller and sinks."""

import asyncio

import pytest

from contracts import FileMeta, Role, SinkError, SubmissionStatus
from form import FormStore, UploadedFile
from orchestrator import (
    RecordingSink,
    SimulatedSink,
    SubmissionController,
    get_sink,
    list_sinks,
)
from registry import get_schema, default_values


async def _settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


class TestInvalidSubmission:
    """An invalid form never leaves idle."""

    def test_stays_idle_and_touches_everything(self):
        store = FormStore()
        sink = RecordingSink()
        controller = SubmissionController(store, sink=sink)

        status = asyncio.run(controller.submit())

        assert status == SubmissionStatus.IDLE
        assert controller.status == SubmissionStatus.IDLE
        assert store.touched == set(get_schema(Role.EXPERT).keys())
        assert sink.calls == []
        assert not controller.last_result.is_valid
        assert store.visible_errors() == controller.last_result.errors


class TestValidSubmission:
    """idle -> submitting -> success."""

    def test_reaches_success_with_one_sink_call(self, expert_store, expert_values):
        sink = RecordingSink()
        seen = []
        controller = SubmissionController(
            expert_store, sink=sink, reset_delay_seconds=60, on_status_change=seen.append
        )

        async def scenario():
            try:
                return await controller.submit()
            finally:
                controller.close()

        status = asyncio.run(scenario())

        assert status == SubmissionStatus.SUCCESS
        assert seen == [SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCESS]
        assert len(sink.calls) == 1
        received = sink.calls[0].values
        assert received["email"] == expert_values["email"]
        assert received["secondary_specializations"] == ("Offshore Operations", "HSE Management")
        assert sink.calls[0].attachment is None

    def test_attachment_forwarded(self, company_store):
        company_store.set_attachment(UploadedFile(name="brochure.pdf", size_bytes=4096))
        sink = RecordingSink()
        controller = SubmissionController(company_store, sink=sink, reset_delay_seconds=60)

        async def scenario():
            await controller.submit()
            controller.close()

        asyncio.run(scenario())
        assert sink.calls[0].attachment == FileMeta(
            name="brochure.pdf", size_bytes=4096, mime_or_extension="pdf"
        )

    def test_edits_during_submitting_do_not_change_snapshot(self, expert_store):
        sink = RecordingSink(delay_seconds=0.05)
        controller = SubmissionController(expert_store, sink=sink, reset_delay_seconds=60)

        async def scenario():
            task = asyncio.create_task(controller.submit())
            await _settle()
            assert controller.status == SubmissionStatus.SUBMITTING
            assert controller.is_submit_disabled
            expert_store.set_field_value("city", "Warri")
            status = await task
            controller.close()
            return status

        assert asyncio.run(scenario()) == SubmissionStatus.SUCCESS
        assert sink.calls[0].values["city"] == "Port Harcourt"
        assert controller.last_snapshot.values["city"] == "Port Harcourt"

    def test_reentrant_submit_is_ignored(self, expert_store):
        sink = RecordingSink(delay_seconds=0.05)
        controller = SubmissionController(expert_store, sink=sink, reset_delay_seconds=60)

        async def scenario():
            task = asyncio.create_task(controller.submit())
            await _settle()
            second = await controller.submit()
            first = await task
            controller.close()
            return first, second

        first, second = asyncio.run(scenario())
        assert second == SubmissionStatus.SUBMITTING
        assert first == SubmissionStatus.SUCCESS
        assert len(sink.calls) == 1

    def test_sink_cannot_mutate_recorded_snapshot(self, expert_store):
        class TamperingSink(RecordingSink):
            async def submit(self, values, attachment):
                values["city"] = "Warri"
                await super().submit(values, attachment)

        controller = SubmissionController(expert_store, sink=TamperingSink(), reset_delay_seconds=60)

        async def scenario():
            await controller.submit()
            controller.close()

        asyncio.run(scenario())
        assert controller.last_snapshot.values["city"] == "Port Harcourt"


class TestAutoReset:
    """success -> idle after the configured delay."""

    def test_returns_to_idle_with_defaults(self, expert_store):
        expert_store.set_attachment(UploadedFile(name="cv.pdf", size_bytes=1024))
        controller = SubmissionController(expert_store, sink=RecordingSink(), reset_delay_seconds=0.01)

        async def scenario():
            await controller.submit()
            assert controller.reset_pending
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert controller.status == SubmissionStatus.IDLE
        assert not controller.reset_pending
        assert expert_store.values == default_values(get_schema(Role.EXPERT))
        assert expert_store.touched == set()
        assert expert_store.attachment is None

    def test_close_cancels_pending_reset(self, expert_store):
        controller = SubmissionController(expert_store, sink=RecordingSink(), reset_delay_seconds=0.01)

        async def scenario():
            await controller.submit()
            controller.close()
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert controller.status == SubmissionStatus.SUCCESS
        assert expert_store.get("city") == "Port Harcourt"

    def test_submit_during_success_is_ignored(self, expert_store):
        sink = RecordingSink()
        controller = SubmissionController(expert_store, sink=sink, reset_delay_seconds=60)

        async def scenario():
            await controller.submit()
            status = await controller.submit()
            controller.close()
            return status

        assert asyncio.run(scenario()) == SubmissionStatus.SUCCESS
        assert len(sink.calls) == 1

    def test_closed_controller_rejects_submit(self, expert_store):
        controller = SubmissionController(expert_store, sink=RecordingSink())
        controller.close()
        with pytest.raises(RuntimeError):
            asyncio.run(controller.submit())


class TestSinkFailure:
    """Sink failures end in error and wait for a manual resubmit."""

    def test_sink_error(self, expert_store):
        controller = SubmissionController(expert_store, sink=RecordingSink(error=SinkError("Service unavailable")))
        status = asyncio.run(controller.submit())
        assert status == SubmissionStatus.ERROR
        assert controller.last_error == "Service unavailable"
        assert not controller.reset_pending
        assert not controller.is_submit_disabled

    def test_unexpected_exception_becomes_error(self, expert_store):
        controller = SubmissionController(expert_store, sink=RecordingSink(error=ConnectionError("network down")))
        assert asyncio.run(controller.submit()) == SubmissionStatus.ERROR
        assert controller.last_error == "network down"

    def test_timeout(self, expert_store):
        controller = SubmissionController(
            expert_store, sink=RecordingSink(delay_seconds=1.0), timeout_seconds=0.01
        )
        assert asyncio.run(controller.submit()) == SubmissionStatus.ERROR
        assert "timed out" in controller.last_error

    def test_resubmit_after_error(self, expert_store):
        failing = RecordingSink(error=SinkError("Service unavailable"))
        controller = SubmissionController(expert_store, sink=failing, reset_delay_seconds=60)

        async def scenario():
            await controller.submit()
            controller.sink = RecordingSink()
            status = await controller.submit()
            controller.close()
            return status

        assert asyncio.run(scenario()) == SubmissionStatus.SUCCESS
        assert controller.last_error is None
        assert len(failing.calls) == 1

    def test_cancelled_submission_releases_submit(self, expert_store):
        controller = SubmissionController(expert_store, sink=RecordingSink(delay_seconds=1.0))

        async def scenario():
            task = asyncio.create_task(controller.submit())
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        assert controller.status == SubmissionStatus.ERROR
        assert controller.last_error == "Submission cancelled"
        assert not controller.is_submit_disabled


class TestSinks:
    """Sink factory and the simulated sink."""

    def test_list_sinks(self):
        assert list_sinks() == ["simulated", "recording"]

    def test_get_sink_default(self):
        assert isinstance(get_sink(), SimulatedSink)

    def test_get_sink_unknown(self):
        with pytest.raises(ValueError, match="Unknown sink"):
            get_sink("smtp")

    def test_simulated_sink_succeeds(self):
        sink = SimulatedSink(delay_seconds=0)
        assert asyncio.run(sink.submit({"city": "Lagos"}, None)) is None
