"""In-memory store for original content behind summaries."""
