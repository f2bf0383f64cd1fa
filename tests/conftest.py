"""Shared test fixtures for the job_tracker_ai test suite."""

import json
from types import SimpleNamespace

import httpx
import pytest


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions; records every create() call."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def make_llm_client():
    """Factory: make_llm_client(payload=dict | str, error=Exception) -> fake client."""

    def _make(payload=None, error=None):
        content = json.dumps(payload) if isinstance(payload, dict) else payload
        completions = FakeCompletions(content=content, error=error)
        return SimpleNamespace(chat=SimpleNamespace(completions=completions))

    return _make


@pytest.fixture
def job_payload():
    return {
        "company": "Acme Robotics",
        "role": "Senior Backend Engineer",
        "salary": "€70,000 - €85,000",
        "location": "Barcelona",
        "remote_status": "Hybrid",
    }


@pytest.fixture
def mock_http(monkeypatch):
    """install(handler) routes every httpx.AsyncClient through httpx.MockTransport(handler)."""
    real_client = httpx.AsyncClient

    def install(handler):
        def factory(*args, **kwargs):
            return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", factory)

    return install


def job_posting_html(body: str) -> str:
    return (
        "<html><head><title>Job</title>"
        "<style>.nav { color: red; }</style>"
        "<script>window.__STATE__ = {\"user\": null};</script>"
        f"</head><body><main>{body}</main></body></html>"
    )
