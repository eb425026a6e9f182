"""LLM adapter and prompt templates for report summarisation."""

from vintel.llm.adapter import LLMAdapter

__all__ = ["LLMAdapter"]
