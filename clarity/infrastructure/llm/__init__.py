"""LLM infrastructure module."""

from clarity.infrastructure.llm.client import create_anthropic_client, run_completion

__all__ = [
    "create_anthropic_client",
    "run_completion",
]
