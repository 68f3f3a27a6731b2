"""Base completion provider abstraction."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Literal

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from talkforge.errors import GenerationFailure, GenerationFailureKind

logger = logging.getLogger(__name__)

ProviderName = Literal["google", "openai", "anthropic"]

DEFAULT_MODELS: dict[str, str] = {
    "google": "gemini-2.5-flash",
    "openai": "gpt-5-mini",
    "anthropic": "claude-sonnet-4-5-20250929",
}

# Network calls are not retried; the first failure is reported to the user
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 0


class LLMProvider(ABC):
    """Abstract base class for completion providers.

    A provider turns a system instruction and user content into raw response
    text. Failures are raised as GenerationFailure with a user-facing message.
    """

    model: str
    label: str = "model"

    @abstractmethod
    async def agenerate(self, system_prompt: str, user_prompt: str) -> str:
        """Return the model's raw text response."""


def message_text(content: Any) -> str:
    """Flatten LangChain message content (string or content blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "\n".join(parts)
    return ""


class LangChainProvider(LLMProvider):
    """Provider backed by a LangChain chat model.

    The chat model is created on first use and cached.
    """

    _chat_model: BaseChatModel | None = None

    def get_chat_model(self) -> BaseChatModel:
        """Get a cached chat model instance."""
        if self._chat_model is None:
            self._chat_model = self._create_chat_model()
        return self._chat_model

    @abstractmethod
    def _create_chat_model(self) -> BaseChatModel:
        """Create a new chat model instance. Override in subclasses."""
        pass

    async def agenerate(self, system_prompt: str, user_prompt: str) -> str:
        model = self.get_chat_model()
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            response = await model.ainvoke(messages)
        except Exception as e:
            # SDK errors (openai, anthropic) expose the HTTP status as status_code
            status_code = getattr(e, "status_code", None)
            logger.warning(f"{self.label} request failed: {type(e).__name__} ({status_code})")
            if isinstance(status_code, int):
                raise GenerationFailure.from_status(status_code, str(e), self.label) from e
            raise GenerationFailure(f"Failed to generate topics. {str(e)[:160]}") from e

        text = message_text(response.content)
        if not text.strip():
            raise GenerationFailure(
                "Failed to parse model response.", GenerationFailureKind.EMPTY
            )
        return text


def get_llm_provider(
    provider: ProviderName,
    model: str | None = None,
    api_key: str | None = None,
    temperature: float = 0.8,
    timeout: float = DEFAULT_TIMEOUT,
    api_base: str | None = None,
) -> LLMProvider:
    """Factory function to get a provider instance.

    ``api_base`` only applies to the REST-based Google provider.
    """
    if provider == "google":
        from talkforge.llm.gemini import DEFAULT_API_BASE, GeminiProvider

        return GeminiProvider(
            model=model or DEFAULT_MODELS["google"],
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
            api_base=api_base or DEFAULT_API_BASE,
        )
    elif provider == "openai":
        from talkforge.llm.openai import OpenAIProvider

        return OpenAIProvider(
            model=model or DEFAULT_MODELS["openai"],
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
        )
    elif provider == "anthropic":
        from talkforge.llm.anthropic import AnthropicProvider

        return AnthropicProvider(
            model=model or DEFAULT_MODELS["anthropic"],
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
        )
    else:
        raise ValueError(f"Unknown provider: {provider}")
