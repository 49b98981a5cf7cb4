"""Logging and metrics for clusterlint."""
