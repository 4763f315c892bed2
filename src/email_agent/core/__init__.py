"""Cross-cutting infrastructure: structured logging and error types."""
