"""Spiral enumeration, ranking, placement and stabilization."""
