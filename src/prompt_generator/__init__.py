"""Build a single LLM prompt from a source tree and free-text instructions."""

__version__ = "0.1.0"
