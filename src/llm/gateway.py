"""Thin async wrapper around LiteLLM for LLM completions."""

import logging
from typing import Any

import litellm
from pydantic import BaseModel

from config.settings import settings

logger = logging.getLogger(__name__)


class CompletionResult(BaseModel):
    """Result from an LLM completion."""

    content: str | None = None
    model: str = ""


class LLMGateway:
    """Async LLM completion via LiteLLM."""

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        temperature: float | None = None,
    ) -> None:
        self.model = model or settings.llm_default_model
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.temperature = temperature if temperature is not None else settings.llm_temperature

    @property
    def configured(self) -> bool:
        """Whether an API key is available for the provider."""
        return bool(self.api_key)

    async def complete(self, messages: list[dict[str, Any]]) -> CompletionResult:
        """Send messages to the LLM and return the response.

        Args:
            messages: OpenAI-format message list (system/user/assistant).

        Returns:
            CompletionResult with content and the model that answered.
        """
        logger.info("Calling LLM model=%s", self.model)
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key

        response = await litellm.acompletion(**kwargs)
        message = response.choices[0].message

        return CompletionResult(
            content=message.content,
            model=response.model or self.model,
        )
