"""
LLM Client: one OpenAI /chat/completions request per call.

The caller's credential goes into a client built for that call only, so it is
never kept around between requests. Retries are disabled: a failed attempt is
final and reported straight back.
"""

import json
import logging
from typing import Optional

import httpx
from openai import APIConnectionError, APIStatusError, OpenAI

from config import config
from modules.errors import TransportFailure

logger = logging.getLogger(__name__)


def call_chat(
    messages: list[dict],
    credential: str,
    max_tokens: int,
    temperature: Optional[float] = None,
    http_client: Optional[httpx.Client] = None,
) -> dict:
    """Send a chat completion request and return the decoded response envelope."""
    if temperature is None:
        temperature = config.LLM_TEMPERATURE

    client = OpenAI(
        api_key=credential,
        base_url=config.OPENAI_BASE_URL,
        max_retries=0,
        http_client=http_client,
    )
    try:
        raw = client.chat.completions.with_raw_response.create(
            model=config.LLM_MODEL,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except APIStatusError as e:
        logger.warning("Chat completion rejected with HTTP %s", e.status_code)
        raise TransportFailure(e.status_code, e.response.reason_phrase) from e
    except APIConnectionError as e:
        logger.warning("Chat completion could not be delivered: %s", e)
        raise TransportFailure(None, str(e)) from e
    finally:
        # An injected client belongs to the caller.
        if http_client is None:
            client.close()

    response = raw.http_response
    try:
        return response.json()
    except json.JSONDecodeError as e:
        raise TransportFailure(response.status_code, "response body is not JSON") from e
