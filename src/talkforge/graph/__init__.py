"""LangGraph workflow for talk topic generation."""

from talkforge.graph.workflow import create_talkforge_graph, run_topic_generation

__all__ = ["create_talkforge_graph", "run_topic_generation"]
