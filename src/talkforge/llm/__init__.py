"""Completion provider abstraction."""

from talkforge.llm.base import LLMProvider, get_llm_provider

__all__ = ["LLMProvider", "get_llm_provider"]
