"""Configuration, persistence, errors, observability and request plumbing."""
