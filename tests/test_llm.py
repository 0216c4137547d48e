"""
Tests for the completion-service provider, model routing and log redaction.
"""
from types import SimpleNamespace

import pytest

import interview_coach.llm as llm
from interview_coach.core import config
from interview_coach.core.errors import UpstreamFailureError
from interview_coach.core.logging_config import sanitize_log_data
from interview_coach.llm.openai_provider import OpenAIProvider
from interview_coach.llm.router import get_max_tokens_for_feature, get_model_for_feature


class FakeCompletions:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


def make_provider(response) -> OpenAIProvider:
    provider = OpenAIProvider(api_key="sk-test")
    completions = FakeCompletions(response)
    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return provider


def chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


def test_model_routing():
    assert get_model_for_feature("interview") == config.INTERVIEW_MODEL
    assert get_max_tokens_for_feature("interview") == config.INTERVIEW_MAX_TOKENS
    assert get_max_tokens_for_feature("feedback") == config.FEEDBACK_MAX_TOKENS


def test_chat_json_mode_sets_response_format():
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='{"overallScore": 1}'), finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
    )
    provider = make_provider(response)

    result = provider.chat([{"role": "user", "content": "hi"}], model="gpt-4o", json_mode=True)

    call = provider.client.chat.completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert result.content == '{"overallScore": 1}'
    assert result.tokens_out == 5


def test_stream_skips_empty_chunks():
    stream = [chunk("Hel"), SimpleNamespace(choices=[]), chunk(None), chunk("lo")]
    provider = make_provider(stream)

    tokens = list(provider.stream([{"role": "system", "content": "x"}], model="gpt-4o", max_tokens=512))

    assert tokens == ["Hel", "lo"]
    assert provider.client.chat.completions.calls[0]["stream"] is True


def test_provider_requires_api_key(monkeypatch):
    monkeypatch.setattr("interview_coach.llm.openai_provider.OPENAI_API_KEY", "")

    with pytest.raises(ValueError):
        OpenAIProvider()


def test_unconfigured_provider_dependency(monkeypatch):
    monkeypatch.setattr("interview_coach.llm.openai_provider.OPENAI_API_KEY", "")
    monkeypatch.setattr(llm, "_provider", None)

    with pytest.raises(UpstreamFailureError) as exc_info:
        llm.get_llm_provider()

    assert exc_info.value.message == "AI service is not configured"


def test_sanitize_log_data_redacts_secrets():
    cleaned = sanitize_log_data({"id_token": "abc", "access_token": "def", "expires_in": 3599})

    assert cleaned == {"id_token": "***REDACTED***", "access_token": "***REDACTED***", "expires_in": 3599}


def test_sanitize_log_data_redacts_authorization_code():
    cleaned = sanitize_log_data({"code": "4/abc", "state": "xyz"})

    assert cleaned == {"code": "***REDACTED***", "state": "xyz"}
