"""Domain objects for frontiercrawl - explicit re-exports to satisfy linters."""
from .flags import Bitfield as Bitfield
from .identity import COMMON_HASH_LENGTH as COMMON_HASH_LENGTH
from .request import Request as Request
from .status import RequestStatus as RequestStatus
from .status import StatusTracker as StatusTracker
from .status import WorkflowStatus as WorkflowStatus

__all__ = ["Bitfield", "COMMON_HASH_LENGTH", "Request", "RequestStatus", "StatusTracker", "WorkflowStatus"]
