"""Main LangGraph workflow assembly."""

import time
from collections.abc import Callable
from typing import Literal

from langgraph.graph import END, START, StateGraph

from talkforge.config import get_settings
from talkforge.github.client import GitHubClient
from talkforge.graph.edges import route_after_validation
from talkforge.graph.nodes import STEP_DESCRIPTIONS, create_nodes
from talkforge.llm.base import LLMProvider, get_llm_provider
from talkforge.models.state import SpeakerInput, TalkForgeState
from talkforge.processors.topic_generator import TopicGenerator
from talkforge.processors.validation import validate_api_key


def create_talkforge_graph(
    llm_provider: LLMProvider,
    github_client: GitHubClient | None = None,
    on_step_start: Callable[[str, str], None] | None = None,
):
    """Create and compile the topic generation workflow graph.

    Args:
        llm_provider: Completion provider used for generation.
        github_client: GitHub client (a default one is created if omitted).
        on_step_start: Optional callback(step_name, description) fired when a step starts.

    Returns:
        Compiled StateGraph.
    """
    if github_client is None:
        settings = get_settings()
        github_client = GitHubClient(
            api_base=settings.github_api_base,
            user_agent=settings.github_user_agent,
        )

    generator = TopicGenerator(llm_provider, github_client)
    nodes = create_nodes(generator, on_step_start=on_step_start)

    workflow = StateGraph(TalkForgeState)

    workflow.add_node("validate_inputs", nodes["validate_inputs"])
    workflow.add_node("fetch_github", nodes["fetch_github"])
    workflow.add_node("generate_topics", nodes["generate_topics"])

    workflow.add_edge(START, "validate_inputs")
    workflow.add_conditional_edges(
        "validate_inputs",
        route_after_validation,
        {
            "fetch_github": "fetch_github",
            "generate_topics": "generate_topics",
            "error": END,
        },
    )
    workflow.add_edge("fetch_github", "generate_topics")
    workflow.add_edge("generate_topics", END)

    return workflow.compile()


def build_initial_state(
    speakers: list[SpeakerInput],
    event_description: str | None = None,
) -> TalkForgeState:
    """Create the starting state for one or two speakers."""
    return {
        "mode": "collaboration" if len(speakers) > 1 else "solo",
        "speakers": speakers,
        "event_description": event_description,
        "github_data": [None] * len(speakers),
        "topics": [],
        "step_timings": [],
        "current_step_start": None,
        "total_generation_time": None,
        "current_step": "start",
        "current_step_description": "Initializing...",
        "errors": [],
    }


async def run_topic_generation(
    speakers: list[SpeakerInput],
    event_description: str | None = None,
    provider: Literal["google", "openai", "anthropic"] | None = None,
    api_key: str | None = None,
    llm_provider: LLMProvider | None = None,
    github_client: GitHubClient | None = None,
    progress_callback: Callable[[str, str, float], None] | None = None,
) -> TalkForgeState:
    """Run the topic generation workflow.

    Args:
        speakers: One speaker (solo) or two (collaboration), with raw profile text.
        event_description: Optional event context.
        provider: Provider name; defaults to settings.
        api_key: API key for the provider; defaults to settings.
        llm_provider: Ready-made provider, bypassing provider/api_key.
        github_client: GitHub client override.
        progress_callback: Optional callback(step_name, description, elapsed_seconds).

    Returns:
        Final workflow state. Failures are reported in ``errors``.
    """
    initial_state = build_initial_state(speakers, event_description)

    if llm_provider is None:
        settings = get_settings()
        provider = provider or settings.provider
        api_key = api_key or settings.api_key_for(provider)
        key_check = validate_api_key(api_key)
        if not key_check.is_valid:
            initial_state["errors"] = [key_check.error]
            return initial_state
        llm_provider = get_llm_provider(
            provider,
            model=settings.model_for(provider),
            api_key=api_key,
            temperature=settings.temperature,
            timeout=settings.request_timeout,
            api_base=settings.gemini_api_base,
        )

    graph = create_talkforge_graph(llm_provider, github_client)
    start_time = time.time()

    if progress_callback:
        final_state = dict(initial_state)
        async for event in graph.astream(initial_state, stream_mode="updates"):
            for node_name, node_output in event.items():
                elapsed = time.time() - start_time
                if node_name in STEP_DESCRIPTIONS:
                    desc = (
                        node_output.get("current_step_description")
                        if isinstance(node_output, dict)
                        else None
                    ) or STEP_DESCRIPTIONS[node_name]
                    progress_callback(node_name, desc, elapsed)
                if isinstance(node_output, dict):
                    final_state.update(node_output)
        final_state["total_generation_time"] = time.time() - start_time
        return final_state

    result = await graph.ainvoke(initial_state)
    result["total_generation_time"] = time.time() - start_time
    return result
