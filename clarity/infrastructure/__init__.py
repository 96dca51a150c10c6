"""Infrastructure: cache, LLM client and logging."""
