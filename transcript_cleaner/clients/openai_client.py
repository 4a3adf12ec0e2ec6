# transcript_cleaner/clients/openai_client.py
# ------------------------------------------------------------
# Thin wrapper around the OpenAI chat-completions API.
# The provider is treated as opaque: system + user prompt in,
# completion text + total token count out. Provider errors are
# not caught here; routes turn them into HTTP 500s.
# ------------------------------------------------------------
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from openai import AsyncOpenAI

from transcript_cleaner.models.transcript import Completion

# Load environment
load_dotenv()
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.1"))

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(RuntimeError):
    pass


class CompletionClient:
    def __init__(
        self,
        model: str = OPENAI_MODEL,
        temperature: float = OPENAI_TEMPERATURE,
        api_key: Optional[str] = None,
    ):
        self.model = model
        self.temperature = temperature
        self._api_key = api_key
        self._client: Optional[AsyncOpenAI] = None

    @property
    def api_key(self) -> Optional[str]:
        # read lazily so a key added to .env after import still counts
        return self._api_key or os.getenv("OPENAI_API_KEY")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.configured:
                raise LLMNotConfiguredError("OpenAI API key not configured")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete(self, system_prompt: str, user_prompt: str) -> Completion:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
        )

        text = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        tokens = (usage.total_tokens or 0) if usage else 0
        logger.debug("Completion from %s: %d chars, %d tokens", self.model, len(text), tokens)
        return Completion(text=text, tokens_used=tokens)


_default_client: Optional[CompletionClient] = None


def get_completion_client() -> CompletionClient:
    """FastAPI dependency; tests override it with a fake client."""
    global _default_client
    if _default_client is None:
        _default_client = CompletionClient()
    return _default_client
