"""Transient (message, code) status attached to a request.

Codes and legal transitions belong to the workflow authority; the tracker
stores them without interpretation.
"""
from enum import IntEnum
from typing import NamedTuple, Protocol


class WorkflowStatus(IntEnum):
    """Default code table of the crawler workflow."""
    NONE = 0
    INITIATED = 1
    STARTED = 2
    RUNNING = 3
    FINISHED = 4


class WorkflowAuthority(Protocol):
    """Owner of valid status codes and their transitions."""

    def is_valid(self, code: int) -> bool: ...

    def can_transition(self, current: int, new: int) -> bool: ...


class RequestStatus(NamedTuple):
    message: str
    code: int


class StatusTracker:
    """Mutable status pair. Not synchronized; the owner of the request serializes writes."""

    def __init__(self, message: str = "", code: int = WorkflowStatus.NONE):
        self._message = message
        self._code = int(code)

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> int:
        return self._code

    def get(self) -> RequestStatus:
        return RequestStatus(self._message, self._code)

    def set(self, message: str, code: int) -> None:
        self._message = message
        self._code = int(code)

    def __repr__(self):
        return f"<StatusTracker code={self._code} message={self._message!r}>"
