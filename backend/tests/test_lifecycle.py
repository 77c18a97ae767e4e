"""Per-request state machine tests."""
import pytest

from modules.errors import MalformedJsonFailure
from modules.lifecycle import ExplanationCall, RequestStatus


def test_starts_idle():
    call = ExplanationCall()
    assert call.status is RequestStatus.IDLE


def test_success_carries_result():
    call = ExplanationCall()
    seen = []

    def work():
        seen.append(call.status)
        return "result"

    assert call.execute(work) == "result"
    assert seen == [RequestStatus.PENDING]
    assert call.status is RequestStatus.SUCCESS
    assert call.result == "result"
    assert call.error is None


def test_failure_carries_message():
    call = ExplanationCall()

    def work():
        raise MalformedJsonFailure("nope")

    assert call.execute(work) is None
    assert call.status is RequestStatus.FAILED
    assert call.error == "Failed to parse OpenAI response as JSON"
    assert isinstance(call.failure, MalformedJsonFailure)


def test_terminal_until_reset():
    call = ExplanationCall()
    call.execute(lambda: 1)
    with pytest.raises(RuntimeError):
        call.execute(lambda: 2)

    call.reset()
    assert call.status is RequestStatus.IDLE
    assert call.execute(lambda: 2) == 2


def test_unexpected_errors_propagate():
    call = ExplanationCall()

    def work():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        call.execute(work)
