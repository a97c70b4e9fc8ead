"""Core pipeline, logging, progress and error types."""
