"""Tests for completion providers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from talkforge.errors import GenerationFailure, GenerationFailureKind
from talkforge.llm.base import LangChainProvider, LLMProvider, get_llm_provider, message_text
from talkforge.llm.gemini import GeminiProvider


class TestGetLLMProvider:
    """Tests for the get_llm_provider factory function."""

    @patch("talkforge.llm.openai.OpenAIProvider")
    def test_openai_provider(self, mock_provider: MagicMock) -> None:
        """Test that openai provider is created correctly."""
        mock_instance = MagicMock()
        mock_provider.return_value = mock_instance

        result = get_llm_provider("openai", "gpt-4o", "test-key")

        mock_provider.assert_called_once_with(
            model="gpt-4o", api_key="test-key", temperature=0.8, timeout=60.0
        )
        assert result == mock_instance

    @patch("talkforge.llm.anthropic.AnthropicProvider")
    def test_anthropic_default_model(self, mock_provider: MagicMock) -> None:
        """Test that anthropic uses default model when not specified."""
        get_llm_provider("anthropic")
        mock_provider.assert_called_once_with(
            model="claude-sonnet-4-5-20250929", api_key=None, temperature=0.8, timeout=60.0
        )

    def test_google_returns_gemini(self) -> None:
        provider = get_llm_provider("google", api_key="k")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-flash"
        assert provider.api_key == "k"

    def test_google_api_base(self) -> None:
        """Test that a custom API base reaches the Gemini endpoint."""
        provider = get_llm_provider("google", api_key="k", api_base="https://proxy.example/v1/")
        assert provider.endpoint == (
            "https://proxy.example/v1/models/gemini-2.5-flash:generateContent"
        )

    def test_unknown_provider_raises(self) -> None:
        """Test that unknown provider raises ValueError."""
        with pytest.raises(ValueError, match="Unknown provider: invalid"):
            get_llm_provider("invalid")  # type: ignore[arg-type]


class TestLLMProviderInterface:
    """Tests for the LLMProvider abstract base class."""

    def test_is_abstract(self) -> None:
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore[abstract]

    def test_langchain_provider_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            LangChainProvider()  # type: ignore[abstract]


class TestMessageText:
    def test_string_content(self) -> None:
        assert message_text("hello") == "hello"

    def test_content_blocks(self) -> None:
        blocks = [{"type": "text", "text": "a"}, {"type": "image"}, "b"]
        assert message_text(blocks) == "a\nb"

    def test_other_content(self) -> None:
        assert message_text(None) == ""


class _StubProvider(LangChainProvider):
    label = "Stub"

    def __init__(self, chat_model: MagicMock):
        self.model = "stub"
        self._chat_model = None
        self.chat_model = chat_model

    def _create_chat_model(self):
        return self.chat_model


class _StatusError(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class TestLangChainProvider:
    """Tests for the shared LangChain call path."""

    def test_sends_system_and_user_messages(self) -> None:
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(return_value=AIMessage(content='{"topics": []}'))
        provider = _StubProvider(chat_model)

        text = asyncio.run(provider.agenerate("system", "user"))

        assert text == '{"topics": []}'
        messages = chat_model.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert messages[0].content == "system"
        assert messages[1].content == "user"

    def test_chat_model_cached(self) -> None:
        provider = _StubProvider(MagicMock())
        assert provider.get_chat_model() is provider.get_chat_model()

    def test_status_errors_mapped(self) -> None:
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(side_effect=_StatusError(401))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(_StubProvider(chat_model).agenerate("system", "user"))

        assert exc_info.value.kind == GenerationFailureKind.INVALID_KEY
        assert exc_info.value.message == "Invalid Stub API key. Please verify and try again."

    def test_other_errors_wrapped(self) -> None:
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(_StubProvider(chat_model).agenerate("system", "user"))

        assert exc_info.value.kind == GenerationFailureKind.HTTP
        assert "boom" in exc_info.value.message

    def test_empty_response(self) -> None:
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(return_value=AIMessage(content=""))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(_StubProvider(chat_model).agenerate("system", "user"))

        assert exc_info.value.kind == GenerationFailureKind.EMPTY
