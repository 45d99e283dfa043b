"""LLM summarization models: base class, provider adapters, prompt building."""
