"""
Pipeline failures: every way an explanation request can end without a result.
All of them are terminal for that request; nothing here is retried.
"""

from typing import Optional


class PipelineFailure(Exception):
    """Base class. `message` is safe to show to the end user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportFailure(PipelineFailure):
    """The API call itself failed (non-success status or no response at all)."""

    def __init__(self, status: Optional[int], status_text: str = ""):
        self.status = status
        self.status_text = status_text
        if status is None:
            message = f"OpenAI API request failed: {status_text}".rstrip(": ")
        else:
            message = f"OpenAI API error: {status} {status_text}".rstrip()
        super().__init__(message)


class EmptyCompletionFailure(PipelineFailure):
    def __init__(self, message: str = "No response from OpenAI API"):
        super().__init__(message)


class MalformedJsonFailure(PipelineFailure):
    """Completion text was present but is not JSON. `raw` is kept for logs only."""

    def __init__(self, raw: str, message: str = "Failed to parse OpenAI response as JSON"):
        super().__init__(message)
        self.raw = raw


class SchemaMismatchFailure(PipelineFailure):
    """Completion parsed as JSON but not in the shape the prompt asked for."""

    def __init__(self, expected: str, errors: list[str]):
        self.expected = expected
        self.errors = errors
        summary = "; ".join(errors[:3])
        if len(errors) > 3:
            summary += f" (+{len(errors) - 3} more)"
        super().__init__(f"OpenAI response does not match the {expected} format: {summary}")


class MissingCredential(Exception):
    """No API key was given, stored, or configured."""
