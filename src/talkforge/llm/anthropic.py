"""Anthropic Claude completion provider."""

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel

from talkforge.llm.base import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, LangChainProvider

DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(LangChainProvider):
    """Anthropic Claude provider."""

    label = "Anthropic"

    def __init__(
        self,
        model: str = "claude-sonnet-4-5-20250929",
        api_key: str | None = None,
        temperature: float = 0.8,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max_retries
        self._chat_model = None

    def _create_chat_model(self) -> BaseChatModel:
        """Create an Anthropic chat model."""
        return ChatAnthropic(
            model=self.model,
            api_key=self.api_key,
            temperature=self.temperature,
            timeout=self.timeout,
            max_retries=self.max_retries,
            max_tokens=DEFAULT_MAX_TOKENS,
        )
