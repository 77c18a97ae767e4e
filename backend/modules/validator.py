"""
Response Validator: checks that a chat completion envelope holds a completion,
that the completion is JSON, and that the JSON has the shape the prompt asked for.
"""

import json
import logging
import re
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from config import config
from modules.errors import EmptyCompletionFailure, MalformedJsonFailure, SchemaMismatchFailure

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def extract_content(envelope: Any) -> str:
    """Return the first choice's message content, or raise EmptyCompletionFailure."""
    if not isinstance(envelope, dict):
        raise EmptyCompletionFailure()

    choices = envelope.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        raise EmptyCompletionFailure()

    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content:
        raise EmptyCompletionFailure()
    return content


def parse_json(text: str, tolerant: bool = False) -> Any:
    """
    Parse completion text as JSON.

    With `tolerant`, a reply that wraps its JSON in a ```json fence is
    unwrapped first. Nothing else is tried.
    """
    candidate = text
    if tolerant:
        match = _FENCED_JSON.search(text)
        if match:
            candidate = match.group(1).strip()

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("Completion is not valid JSON (%s): %.200r", e.msg, text)
        raise MalformedJsonFailure(text) from e


def validate_result(data: Any, model: type[T]) -> T:
    """Check parsed JSON against the expected result model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        logger.warning("Completion failed %s validation: %s", model.__name__, errors)
        raise SchemaMismatchFailure(model.__name__, errors) from e


def parse_completion(envelope: Any, model: type[T], tolerant: Optional[bool] = None) -> T:
    """Envelope → completion text → JSON → typed result."""
    if tolerant is None:
        tolerant = config.TOLERANT_JSON
    content = extract_content(envelope)
    data = parse_json(content, tolerant=tolerant)
    return validate_result(data, model)
