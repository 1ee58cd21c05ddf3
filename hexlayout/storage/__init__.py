"""Position state persistence backends."""
