"""mcpsummarizer — threshold-gated summarization of large tool outputs."""

from mcpsummarizer.version import __version__

__all__ = ["__version__"]
