"""Markdown output formatting."""

from pathlib import Path

from talkforge.models.state import TalkForgeState
from talkforge.models.topics import Topic

TOPIC_SEPARATOR = "\n\n---\n\n"


def save_markdown(content: str, output_path: str | Path) -> Path:
    """Save content to a markdown file.

    Args:
        content: Markdown content to save.
        output_path: Path to save the file.

    Returns:
        Path to the saved file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def format_topic(topic: Topic, number: int) -> str:
    """Format one numbered topic with its metadata block."""
    return (
        f"{number}. {topic.title}\n\n"
        f"Format: {topic.format_label}\n"
        f"Duration: {topic.duration}\n"
        f"Audience: {topic.audience}\n\n"
        f"{topic.description}"
    )


def format_topics_markdown(topics: list[Topic]) -> str:
    """Format all topics as one block, ready to copy or save."""
    return TOPIC_SEPARATOR.join(format_topic(topic, i) for i, topic in enumerate(topics, start=1))


def count_formats(topics: list[Topic]) -> dict[str, int]:
    """Count talks and workshops."""
    workshops = sum(1 for topic in topics if topic.format == "workshop")
    return {"talks": len(topics) - workshops, "workshops": workshops}


def format_result(state: TalkForgeState) -> str:
    """Format the complete result for display.

    Args:
        state: Final workflow state.

    Returns:
        Formatted result string.
    """
    if state.get("errors"):
        return "Errors occurred:\n" + "\n".join(f"- {e}" for e in state["errors"])

    collaborative = state.get("mode") == "collaboration"
    heading = "Collaborative Talk Topics" if collaborative else "Your Talk Topics"
    return f"# {heading}\n\n{format_topics_markdown(state.get('topics', []))}\n"
