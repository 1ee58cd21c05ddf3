"""Utility helpers shared across the hexlayout codebase."""
