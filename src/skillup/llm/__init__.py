"""LLM access (OpenAI-compatible providers)."""
