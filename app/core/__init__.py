"""Cross-cutting configuration, security and helpers."""
