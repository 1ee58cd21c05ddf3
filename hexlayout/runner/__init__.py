"""High-level layout session orchestration."""
