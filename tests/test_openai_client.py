"""CompletionClient against a mocked AsyncOpenAI."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from transcript_cleaner.clients.openai_client import CompletionClient, LLMNotConfiguredError


def _response(text, total_tokens=123):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = text
    if total_tokens is None:
        response.usage = None
    else:
        response.usage.total_tokens = total_tokens
    return response


@pytest.fixture
def mock_openai():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_response("cleaned"))
    return client


@pytest.mark.asyncio
async def test_complete_returns_text_and_tokens(mock_openai):
    llm = CompletionClient(model="gpt-4o", temperature=0.1, api_key="sk-test")
    llm._client = mock_openai

    completion = await llm.complete("system text", "user text")

    assert completion.text == "cleaned"
    assert completion.tokens_used == 123
    mock_openai.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o",
        messages=[
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ],
        temperature=0.1,
    )


@pytest.mark.asyncio
async def test_missing_usage_counts_zero(mock_openai):
    mock_openai.chat.completions.create.return_value = _response(None, total_tokens=None)
    llm = CompletionClient(api_key="sk-test")
    llm._client = mock_openai

    completion = await llm.complete("s", "u")

    assert completion.text == ""
    assert completion.tokens_used == 0


@pytest.mark.asyncio
async def test_provider_errors_propagate(mock_openai):
    mock_openai.chat.completions.create.side_effect = RuntimeError("upstream down")
    llm = CompletionClient(api_key="sk-test")
    llm._client = mock_openai

    with pytest.raises(RuntimeError, match="upstream down"):
        await llm.complete("s", "u")


def test_unconfigured_client(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    llm = CompletionClient()

    assert llm.configured is False
    with pytest.raises(LLMNotConfiguredError):
        _ = llm.client


def test_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert CompletionClient().configured is True
