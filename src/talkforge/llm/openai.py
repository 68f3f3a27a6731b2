"""OpenAI completion provider."""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from talkforge.llm.base import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, LangChainProvider


class OpenAIProvider(LangChainProvider):
    """OpenAI GPT provider."""

    label = "OpenAI"

    def __init__(
        self,
        model: str = "gpt-5-mini",
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
        """Create an OpenAI chat model."""
        return ChatOpenAI(
            model=self.model,
            temperature=self.temperature,
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
