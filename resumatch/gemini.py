"""Gemini text generation through its OpenAI-compatible endpoint."""
from __future__ import annotations

from openai import APIError, APIStatusError, OpenAI

from resumatch.config import gemini_api_key, gemini_base_url, gemini_model
from resumatch.errors import ConfigError, UpstreamError
from resumatch.log import get_logger

log = get_logger(__name__)


class GeminiClient:
    """Single-attempt prompt → raw text call.

    The credential is read when :meth:`generate` runs, so a missing key
    surfaces per request instead of at startup.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        client: OpenAI | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model or gemini_model()
        self.base_url = base_url or gemini_base_url()
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is not None:
            return self._client
        api_key = self._api_key or gemini_api_key()
        if not api_key:
            raise ConfigError("GEMINI_API_KEY is not configured")
        # max_retries=0: the SDK retries twice by default
        return OpenAI(api_key=api_key, base_url=self.base_url, max_retries=0)

    def generate(self, prompt: str) -> str:
        client = self._get_client()
        log.info("Calling %s (prompt %d chars)", self.model, len(prompt))
        try:
            r = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIStatusError as exc:
            log.error("Gemini returned HTTP %s: %s", exc.status_code, exc.message)
            raise UpstreamError(exc.message or "Generative service error", status=exc.status_code) from exc
        except APIError as exc:
            log.error("Gemini request failed: %s", exc)
            raise UpstreamError(str(exc) or "Generative service unreachable") from exc

        if not r.choices:
            raise UpstreamError("Generative service returned no candidates")
        text = r.choices[0].message.content or ""
        log.debug("Gemini responded with %d chars", len(text))
        return text
