"""Model-agnostic LLM interface using the OpenAI-compatible chat API.

Supports OpenAI, DeepSeek and Ollama. Non-Ollama providers require an API
key; a missing key raises ``ConfigError`` when a completion is requested,
before any network call. Calls are bounded by ``llm_timeout`` and are not
retried.
"""

import logging

from openai import APIError, OpenAI

from vintel.exceptions import ConfigError, ExternalServiceError
from vintel.settings import VintelSettings, get_settings

logger = logging.getLogger(__name__)


class LLMAdapter:
    """Unified LLM interface supporting OpenAI, DeepSeek, and Ollama."""

    PROVIDER_CONFIGS = {
        "openai": {"base_url": "https://api.openai.com/v1", "default_model": "gpt-4o-mini"},
        "deepseek": {"base_url": "https://api.deepseek.com/v1", "default_model": "deepseek-chat"},
        "ollama": {"base_url": "http://localhost:11434/v1", "default_model": "llama3.1:8b"},
    }

    def __init__(self, config: VintelSettings | None = None):
        self.config = config or get_settings()
        self.provider = self.config.llm_provider.lower()
        provider_cfg = self.PROVIDER_CONFIGS.get(self.provider, {})

        self.base_url = self.config.llm_base_url or provider_cfg.get("base_url", "")
        self.default_model = self.config.llm_model or provider_cfg.get("default_model", "")
        self._client: OpenAI | None = None
        logger.debug("LLMAdapter configured: provider=%s, model=%s", self.provider, self.default_model)

    @property
    def client(self) -> OpenAI:
        """The underlying OpenAI client, created on first use."""
        if self._client is None:
            api_key = self.config.llm_api_key
            if not api_key and self.provider != "ollama":
                raise ConfigError(
                    f"An LLM API key is required for provider '{self.provider}'. "
                    "Set VINTEL_LLM_API_KEY or OPENAI_API_KEY in .env or the environment."
                )
            self._client = OpenAI(
                base_url=self.base_url,
                api_key=api_key or "ollama",
                timeout=self.config.llm_timeout,
                max_retries=0,
            )
        return self._client

    def complete(self, messages: list[dict], model: str | None = None, temperature: float | None = None) -> str:
        """Send messages to the LLM and return the text response."""
        client = self.client
        model = model or self.default_model
        try:
            response = client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=self.config.llm_temperature if temperature is None else temperature,
                max_tokens=self.config.llm_max_tokens,
            )
        except APIError as exc:
            logger.error("LLM completion failed (model=%s): %s", model, exc)
            raise ExternalServiceError(
                f"LLM completion failed: {exc}",
                service="llm",
                status_code=getattr(exc, "status_code", None),
            ) from exc

        if not response.choices:
            raise ExternalServiceError("LLM returned no choices", service="llm")
        return response.choices[0].message.content or ""
