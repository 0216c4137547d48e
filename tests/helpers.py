"""
Test helpers: a scripted completion provider, SSE frame parsing and signup.
"""
import json
from typing import List, Optional

from fastapi.testclient import TestClient

from interview_coach.llm.provider import LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """Scripted completion service recording every call."""

    def __init__(
        self,
        tokens: Optional[List[str]] = None,
        chat_content: str = "{}",
        fail_after: Optional[int] = None,
        chat_error: Optional[Exception] = None,
    ):
        self.tokens = tokens if tokens is not None else ["Hello! ", "Tell me ", "about yourself."]
        self.chat_content = chat_content
        self.fail_after = fail_after
        self.chat_error = chat_error
        self.stream_calls = []
        self.chat_calls = []

    def stream(self, messages, model, temperature=0.7, max_tokens=None, **kwargs):
        self.stream_calls.append({"messages": messages, "model": model, "max_tokens": max_tokens})
        for index, token in enumerate(self.tokens):
            if self.fail_after is not None and index == self.fail_after:
                raise RuntimeError("upstream connection dropped")
            yield token

    def chat(self, messages, model, temperature=0.7, max_tokens=None, json_mode=False, **kwargs):
        self.chat_calls.append({"messages": messages, "model": model, "json_mode": json_mode})
        if self.chat_error:
            raise self.chat_error
        return LLMResponse(content=self.chat_content, model=model)


def parse_frames(body: str) -> list:
    """Decode `data: {...}` frames from a text/event-stream body."""
    return [
        json.loads(chunk[len("data: "):])
        for chunk in body.split("\n\n")
        if chunk.startswith("data: ")
    ]


def signup(client: TestClient, email: str = "candidate@example.com") -> dict:
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": "testpass123", "firstName": "Casey", "lastName": "Candidate"},
    )
    assert response.status_code == 201, response.text
    return response.json()
