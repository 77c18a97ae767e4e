"""Shared fixtures: a fake OpenAI endpoint behind httpx.MockTransport."""
import json

import httpx
import pytest


def completion(content):
    """A chat.completion envelope whose first choice carries `content`."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4.1-2025-04-14",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


CONCEPT_JSON = {
    "explanation": "Rate limiting caps how many requests a client may send.",
    "scenarioApplication": "The login endpoint allows five attempts per minute.",
    "codeExamples": [
        {"language": "Node.js (Express)", "syntax": "js", "code": "app.use(limiter);"},
        {"language": "Python (FastAPI)", "syntax": "python", "code": "limiter = Limiter()"},
        {"language": "Java (Spring Boot)", "syntax": "java", "code": "@RateLimiter(name = \"login\")"},
    ],
    "relatedConcepts": ["Throttling", "Token bucket", "Backoff"],
    "visualDiagram": "sequenceDiagram\n  User->>Server: login",
}


class FakeOpenAI:
    """Replays queued (status, body) pairs and records every request it sees."""

    def __init__(self):
        self.queue: list[tuple[int, object]] = []
        self.requests: list[httpx.Request] = []

    def reply(self, body, status=200):
        self.queue.append((status, body))

    def reply_content(self, content):
        self.reply(completion(content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.queue.pop(0) if self.queue else (200, completion(json.dumps(CONCEPT_JSON)))
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def sent_json(self, index=-1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api():
    return FakeOpenAI()


@pytest.fixture
def http_client(fake_api):
    client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    yield client
    client.close()
