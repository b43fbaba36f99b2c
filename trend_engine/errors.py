"""Exception types raised by the metrics engine."""
from __future__ import annotations


class TrendPulseError(Exception):
    """Base class for every error TrendPulse raises on purpose."""


class MalformedRecordError(TrendPulseError, ValueError):
    """A raw entity row could not be parsed (bad timestamp, wrong type, ...)."""

    def __init__(self, model: str, index: int, detail: str) -> None:
        super().__init__(f"{model} row {index} is malformed: {detail}")
        self.model = model
        self.index = index


class InvalidBriefTransition(TrendPulseError):
    """A brief state change that the state machine does not allow."""
