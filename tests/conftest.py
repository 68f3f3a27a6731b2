"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable

import httpx
import pytest

from talkforge.config import get_settings
from talkforge.github.client import GitHubClient
from talkforge.llm.base import LLMProvider

SUMMARY_PARAGRAPH = (
    "I build reliable platforms for product teams and enjoy turning hard operational "
    "lessons into practical guidance. Most of my work covers service meshes, release "
    "engineering and incident response for distributed systems at scale."
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from API keys and TALKFORGE_* variables in the environment."""
    for var in (
        "GOOGLE_API_KEY",
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "TALKFORGE_PROVIDER",
        "TALKFORGE_MODEL",
        "TALKFORGE_LOOKUP_DEBOUNCE_MS",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_profile_text() -> str:
    """A modern LinkedIn export: URL, footer, sections and name above Summary."""
    return "\n".join(
        [
            "Contact",
            "john.smith@example.com",
            "www.linkedin.com/in/johnsmith (LinkedIn)",
            "Top Skills",
            "Kubernetes",
            "Distributed Systems",
            "John Smith",
            "Senior Engineer | Acme Corp",
            "San Francisco, California, United States",
            "Summary",
            SUMMARY_PARAGRAPH,
            "Experience",
            "Acme Corp",
            "Senior Engineer",
            "January 2019 - Present (5 years)",
            "Education",
            "State University",
            "Page 1 of 2",
        ]
    )


@pytest.fixture
def invoice_text() -> str:
    """A billing document that mentions a few profile-like words."""
    return (
        "INVOICE #4411\n"
        "Billed to: Example Industries\n"
        "Experience with our service is covered by the terms and conditions below.\n"
        "Please attach this page to your bank statement when reconciling payments.\n"
        "Item: consulting hours, 12 x 150.00\n"
        "Total due within 30 days. Page 1 of 1\n"
    )


class FakeLLMProvider(LLMProvider):
    """Provider returning canned responses and recording prompts."""

    label = "Fake"

    def __init__(self, response: str | Exception = ""):
        self.model = "fake-model"
        self.response = response
        self.calls: list[tuple[str, str]] = []

    async def agenerate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def topics_json(count: int = 2) -> str:
    """Build a valid topics payload with ``count`` entries."""
    return json.dumps(
        {
            "topics": [
                {
                    "title": f"Topic {i}",
                    "description": f"Description {i}",
                    "format": "workshop" if i % 2 == 0 else "talk",
                    "duration": "45 min",
                    "audience": "Advanced",
                }
                for i in range(1, count + 1)
            ]
        }
    )


@pytest.fixture
def fake_llm() -> Callable[..., FakeLLMProvider]:
    """Factory for fake providers."""
    return FakeLLMProvider


@pytest.fixture
def topics_payload() -> str:
    return topics_json()


def make_github_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> GitHubClient:
    """GitHub client wired to an in-memory transport."""
    return GitHubClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.fixture
def github_client_factory() -> Callable[..., GitHubClient]:
    return make_github_client


@pytest.fixture
def topics_json_factory() -> Callable[[int], str]:
    return topics_json
