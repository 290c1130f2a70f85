"""Orchestrator module for the submission lifecycle."""

from .sink import (
    SubmissionSink,
    SimulatedSink,
    RecordingSink,
    SinkCall,
    get_sink,
    list_sinks,
)
from .submission import SubmissionController, SUCCESS_MESSAGE

__all__ = [
    "SubmissionSink",
    "SimulatedSink",
    "RecordingSink",
    "SinkCall",
    "get_sink",
    "list_sinks",
    "SubmissionController",
    "SUCCESS_MESSAGE",
]
