"""Talk topic generation from profile context."""

import json
import logging
from typing import Any

from talkforge.errors import GenerationFailure, GenerationFailureKind
from talkforge.github.client import GitHubClient
from talkforge.llm.base import LLMProvider
from talkforge.models.github import GitHubData
from talkforge.models.topics import Topic, normalize_topics
from talkforge.prompts.topics import build_collab_context, build_solo_context, build_system_prompt

logger = logging.getLogger(__name__)

NON_JSON_MESSAGE = "Model returned non-JSON output. Please try again."
NO_TOPICS_MESSAGE = "No valid topics were generated. Please try again."


def find_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` block in text, if any.

    Braces inside JSON strings are ignored so that prose around the payload
    and braces in descriptions don't break the match.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        # Unbalanced from here; try the next opening brace
        start = text.find("{", start + 1)
    return None


def parse_topics_response(text: str) -> list[Topic]:
    """Parse model output into normalized topics.

    Tries the whole text as JSON first, then the first balanced object
    embedded in surrounding prose.

    Raises:
        GenerationFailure: If no JSON can be recovered or no topic survives
            normalization.
    """
    parsed: Any
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        block = find_json_object(text)
        if block is None:
            raise GenerationFailure(NON_JSON_MESSAGE, GenerationFailureKind.UNPARSEABLE)
        try:
            parsed = json.loads(block)
        except json.JSONDecodeError as e:
            raise GenerationFailure(NON_JSON_MESSAGE, GenerationFailureKind.UNPARSEABLE) from e

    raw_topics = parsed.get("topics") if isinstance(parsed, dict) else None
    topics = normalize_topics(raw_topics)
    if not topics:
        raise GenerationFailure(NO_TOPICS_MESSAGE, GenerationFailureKind.NO_TOPICS)
    return topics


class TopicGenerator:
    """Generate talk and workshop proposals for one or two speakers.

    Profile text and event descriptions must already be sanitized.
    """

    def __init__(self, llm_provider: LLMProvider, github_client: GitHubClient | None = None):
        self.llm_provider = llm_provider
        self.github_client = github_client or GitHubClient()

    async def fetch_github_data(self, username: str | None) -> GitHubData | None:
        """Fetch prompt context for a handle, or None when no handle is given."""
        if not username:
            return None
        return await self.github_client.fetch_data(username)

    async def generate_from_context(
        self, user_prompt: str, collaborative: bool, has_event: bool
    ) -> list[Topic]:
        """Run one completion and parse its topics."""
        system_prompt = build_system_prompt(collaborative=collaborative, has_event=has_event)
        logger.info(
            f"Requesting topics (collaborative={collaborative}, context={len(user_prompt)} chars)"
        )
        text = await self.llm_provider.agenerate(system_prompt, user_prompt)
        topics = parse_topics_response(text)
        logger.info(f"Generated {len(topics)} topics")
        return topics

    async def generate_solo(
        self,
        linkedin_text: str,
        github_username: str | None = None,
        event_description: str | None = None,
        github_data: GitHubData | None = None,
    ) -> list[Topic]:
        """Generate topics for a single speaker.

        Args:
            linkedin_text: Sanitized profile text.
            github_username: Optional handle; fetched unless github_data is given.
            event_description: Sanitized event context.
            github_data: Pre-fetched GitHub context.

        Returns:
            Between one and six topics.
        """
        if github_data is None:
            github_data = await self.fetch_github_data(github_username)
        context = build_solo_context(linkedin_text, github_data, event_description)
        return await self.generate_from_context(
            context, collaborative=False, has_event=bool(event_description)
        )

    async def generate_collab(
        self,
        speakers: list[tuple[str, str | None]],
        event_description: str | None = None,
        github_data: list[GitHubData | None] | None = None,
    ) -> list[Topic]:
        """Generate topics two speakers can present together.

        Args:
            speakers: (sanitized profile text, optional GitHub handle) per speaker.
            event_description: Sanitized event context.
            github_data: Pre-fetched GitHub context aligned with speakers.
        """
        if github_data is None:
            github_data = [await self.fetch_github_data(username) for _, username in speakers]
        context = build_collab_context(
            [(text, data) for (text, _), data in zip(speakers, github_data, strict=True)],
            event_description,
        )
        return await self.generate_from_context(
            context, collaborative=True, has_event=bool(event_description)
        )
