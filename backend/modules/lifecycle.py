"""Per-request lifecycle: IDLE → PENDING → SUCCESS | FAILED."""

from enum import Enum
from typing import Any, Callable, Optional

from modules.errors import PipelineFailure


class RequestStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class ExplanationCall:
    """
    Tracks one user-triggered request. SUCCESS and FAILED are terminal until
    reset(); there is no queue and no guard against other calls in flight.
    """

    def __init__(self):
        self.status = RequestStatus.IDLE
        self.result: Any = None
        self.error: Optional[str] = None
        self.failure: Optional[PipelineFailure] = None

    def execute(self, fn: Callable[[], Any]) -> Any:
        """Run `fn` and record its outcome. Pipeline failures are captured, not raised."""
        if self.status is not RequestStatus.IDLE:
            raise RuntimeError(f"Call is {self.status.value}; reset() before running it again")

        self.status = RequestStatus.PENDING
        try:
            self.result = fn()
        except PipelineFailure as e:
            self.status = RequestStatus.FAILED
            self.failure = e
            self.error = e.message
            return None
        self.status = RequestStatus.SUCCESS
        return self.result

    def reset(self) -> None:
        self.status = RequestStatus.IDLE
        self.result = None
        self.error = None
        self.failure = None
