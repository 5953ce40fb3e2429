"""Text-generation providers.

Every provider answers one prompt with one block of text and raises
`ProviderError` for anything else (network failure, bad key, rate limit,
a response without text). Providers are built once per application by
`build_text_generator` and handed to the services that need them.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipebox.config import Settings
from recipebox.utils.exceptions import ProviderError

logger = logging.getLogger(__name__)

ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1/"
ANTHROPIC_VERSION = "2023-06-01"
GROQ_BASE_URL = "https://api.groq.com/openai/v1/"


class TextGenerator(ABC):
    """One prompt in, one text blob out."""

    provider: str = "unknown"

    def __init__(self, *, model: str, fast_model: str, temperature: float = 0.7) -> None:
        self.model = model
        self.fast_model = fast_model or model
        self.temperature = temperature

    def model_for(self, fast: bool) -> str:
        return self.fast_model if fast else self.model

    @abstractmethod
    async def generate(self, prompt: str, *, max_tokens: int = 1024, fast: bool = False) -> str:
        """Return the model's text for `prompt`, stripped of surrounding whitespace."""

    async def aclose(self) -> None:
        """Release network resources."""
        return None


class GeminiTextGenerator(TextGenerator):
    """Google Gemini through the google-genai SDK."""

    provider = "gemini"

    def __init__(self, *, api_key: str, model: str, fast_model: str, temperature: float = 0.7) -> None:
        super().__init__(model=model, fast_model=fast_model, temperature=temperature)
        self._api_key = api_key
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            if not self._api_key:
                raise ProviderError("GEMINI_API_KEY is not configured", provider=self.provider)
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str, *, max_tokens: int = 1024, fast: bool = False) -> str:
        model = self.model_for(fast)
        client = self.client

        def _sync_call() -> Any:
            return client.models.generate_content(
                model=model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=max_tokens,
                ),
            )

        try:
            resp = await asyncio.to_thread(_sync_call)
        except genai_errors.APIError as e:
            logger.error("Gemini API error: %s", str(e), exc_info=True)
            raise ProviderError(f"Gemini API error: {e}", provider=self.provider, status_code=e.code) from e
        except Exception as e:
            logger.error("Gemini call failed: %s", str(e), exc_info=True)
            raise ProviderError(f"Gemini call failed: {e}", provider=self.provider) from e

        # Depending on SDK version, resp.text is usually present.
        text = getattr(resp, "text", None)
        if not text:
            raise ProviderError("Gemini returned empty response", provider=self.provider)
        logger.debug("Gemini raw response:\n%s", text)
        return text.strip()


class _HTTPTextGenerator(TextGenerator):
    """Providers spoken to over plain HTTPS with httpx."""

    def __init__(
        self,
        *,
        model: str,
        fast_model: str,
        temperature: float = 0.7,
        http_client: httpx.AsyncClient,
    ) -> None:
        super().__init__(model=model, fast_model=fast_model, temperature=temperature)
        self.http_client = http_client

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = await self.http_client.post(path, json=payload)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                "%s returned HTTP %d",
                self.provider,
                status_code,
                extra={"provider": self.provider, "body": e.response.text[:500]},
            )
            raise ProviderError(
                f"{self.provider} returned HTTP {status_code}",
                provider=self.provider,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error("%s request failed: %s", self.provider, str(e), exc_info=True)
            raise ProviderError(f"{self.provider} request failed: {e}", provider=self.provider) from e
        except ValueError as e:
            raise ProviderError(f"{self.provider} returned a non-JSON body", provider=self.provider) from e

    async def aclose(self) -> None:
        await self.http_client.aclose()


class AnthropicTextGenerator(_HTTPTextGenerator):
    """Anthropic Messages API."""

    provider = "anthropic"

    async def generate(self, prompt: str, *, max_tokens: int = 1024, fast: bool = False) -> str:
        data = await self._post(
            "messages",
            {
                "model": self.model_for(fast),
                "max_tokens": max_tokens,
                "temperature": self.temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        try:
            blocks = data["content"]
            text = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
        except (KeyError, TypeError, AttributeError) as e:
            raise ProviderError("anthropic response has no content blocks", provider=self.provider) from e
        if not text.strip():
            raise ProviderError("anthropic returned empty response", provider=self.provider)
        return text.strip()


class GroqTextGenerator(_HTTPTextGenerator):
    """Groq's OpenAI-compatible chat completions endpoint."""

    provider = "groq"

    async def generate(self, prompt: str, *, max_tokens: int = 1024, fast: bool = False) -> str:
        data = await self._post(
            "chat/completions",
            {
                "model": self.model_for(fast),
                "max_tokens": max_tokens,
                "temperature": self.temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        try:
            text = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("groq response has no choices", provider=self.provider) from e
        if not text.strip():
            raise ProviderError("groq returned empty response", provider=self.provider)
        return text.strip()


def build_text_generator(
    settings: Settings,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TextGenerator:
    """Create the provider named by `settings.llm_provider`.

    `http_client` replaces the default client for the httpx-based providers;
    its base URL and auth headers are the caller's responsibility.
    """
    provider = settings.llm_provider.lower()
    common = {
        "model": settings.main_model,
        "fast_model": settings.fast_model,
        "temperature": settings.llm_temperature,
    }

    if provider == "gemini":
        return GeminiTextGenerator(api_key=settings.gemini_api_key, **common)

    if provider == "anthropic":
        client = http_client or httpx.AsyncClient(
            base_url=ANTHROPIC_BASE_URL,
            headers={
                "x-api-key": settings.anthropic_api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
            timeout=settings.http_timeout,
        )
        return AnthropicTextGenerator(http_client=client, **common)

    if provider == "groq":
        client = http_client or httpx.AsyncClient(
            base_url=GROQ_BASE_URL,
            headers={
                "Authorization": f"Bearer {settings.groq_api_key}",
                "Content-Type": "application/json",
            },
            timeout=settings.http_timeout,
        )
        return GroqTextGenerator(http_client=client, **common)

    raise ValueError(f"Unknown LLM provider: {settings.llm_provider!r}")
