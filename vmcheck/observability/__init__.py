"""Logging and metrics for vmcheck."""
