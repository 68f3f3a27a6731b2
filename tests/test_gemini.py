"""Tests for the Gemini REST provider."""

import asyncio
import json

import httpx
import pytest

from talkforge.errors import GenerationFailure, GenerationFailureKind
from talkforge.llm.gemini import GeminiProvider, extract_candidate_text


def _provider(handler) -> GeminiProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiProvider(model="gemini-2.5-flash", api_key="test-key", client=client)


def _candidate(text: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": finish_reason}]
    }


class TestGeminiProvider:
    """Tests for request building and response handling."""

    def test_request_shape(self) -> None:
        """The request carries the key header, system instruction and JSON mode."""
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers["x-goog-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_candidate('{"topics": []}'))

        text = asyncio.run(_provider(handler).agenerate("system", "user"))

        assert text == '{"topics": []}'
        assert seen["url"].endswith("/models/gemini-2.5-flash:generateContent")
        assert seen["key"] == "test-key"
        assert seen["body"]["systemInstruction"] == {"parts": [{"text": "system"}]}
        assert seen["body"]["contents"] == [{"role": "user", "parts": [{"text": "user"}]}]
        assert seen["body"]["generationConfig"] == {
            "responseMimeType": "application/json",
            "temperature": 0.8,
        }

    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (401, GenerationFailureKind.INVALID_KEY),
            (403, GenerationFailureKind.INVALID_KEY),
            (429, GenerationFailureKind.BUSY),
            (500, GenerationFailureKind.HTTP),
        ],
    )
    def test_error_statuses(self, status: int, kind: GenerationFailureKind) -> None:
        provider = _provider(lambda request: httpx.Response(status, text="upstream error"))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(provider.agenerate("system", "user"))

        assert exc_info.value.kind == kind
        assert exc_info.value.status_code == status

    def test_http_error_message_includes_body(self) -> None:
        provider = _provider(lambda request: httpx.Response(500, text="backend exploded"))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(provider.agenerate("system", "user"))

        assert exc_info.value.message == "Failed to generate topics. (500) backend exploded"

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(_provider(handler).agenerate("system", "user"))

        assert exc_info.value.kind == GenerationFailureKind.HTTP

    def test_non_json_body(self) -> None:
        provider = _provider(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(GenerationFailure) as exc_info:
            asyncio.run(provider.agenerate("system", "user"))

        assert exc_info.value.kind == GenerationFailureKind.EMPTY


class TestExtractCandidateText:
    """Tests for reading the first candidate."""

    def test_joins_parts(self) -> None:
        data = {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
        assert extract_candidate_text(data) == "a\nb"

    def test_safety_block(self) -> None:
        with pytest.raises(GenerationFailure) as exc_info:
            extract_candidate_text(_candidate("", finish_reason="SAFETY"))
        assert exc_info.value.kind == GenerationFailureKind.SAFETY
        assert "safety filters" in exc_info.value.message

    def test_empty_candidate(self) -> None:
        with pytest.raises(GenerationFailure) as exc_info:
            extract_candidate_text({"candidates": []})
        assert exc_info.value.kind == GenerationFailureKind.EMPTY
        assert exc_info.value.message == "Failed to parse model response."

    def test_unexpected_shape(self) -> None:
        with pytest.raises(GenerationFailure):
            extract_candidate_text(["not", "a", "dict"])
