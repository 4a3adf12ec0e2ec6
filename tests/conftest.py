"""
Shared pytest fixtures for the transcript cleaner tests.

The OpenAI provider is never called: routes get a FakeCompletionClient
through FastAPI dependency overrides, and the in-memory job store is
reset around every test.
"""

import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("LOG_LEVEL", "WARNING")

from transcript_cleaner.clients.openai_client import get_completion_client  # noqa: E402
from transcript_cleaner.main import app  # noqa: E402
from transcript_cleaner.models.transcript import Completion  # noqa: E402
from transcript_cleaner.services import job_store  # noqa: E402


RAW_TRANSCRIPT = """Krista(Operator)
0
Your next question comes from the line of Doug Anmuth with JP Morgan. Please go ahead.
Thanks so much for taking the questions. Can you talk about ad pricing?
Jane Smith(Chief Financial Officer)
0
Sure, Doug. Pricing was up 10% year over year."""


class FakeCompletionClient:
    """
    Stand-in for CompletionClient.

    reply:
      - None      -> echo the transcript part of the user prompt
      - str       -> always return that text
      - callable  -> reply(system_prompt, user_prompt) -> str
    """

    def __init__(self, reply=None, tokens=10, configured=True, error=None):
        self.reply = reply
        self.tokens = tokens
        self.configured = configured
        self.error = error
        self.calls = []

    async def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        if self.reply is None:
            text = user_prompt.split("Transcript:\n", 1)[-1]
        elif callable(self.reply):
            text = self.reply(system_prompt, user_prompt)
        else:
            text = self.reply
        return Completion(text=text, tokens_used=self.tokens)


@pytest.fixture(autouse=True)
def clean_job_store():
    job_store._reset_jobs_for_tests()
    yield
    job_store._reset_jobs_for_tests()


@pytest.fixture
def fake_llm():
    return FakeCompletionClient()


@pytest.fixture
def make_client():
    """Build a TestClient whose LLM dependency is the given fake."""
    def _make(llm):
        app.dependency_overrides[get_completion_client] = lambda: llm
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(make_client, fake_llm):
    return make_client(fake_llm)


@pytest.fixture
def raw_transcript():
    return RAW_TRANSCRIPT
