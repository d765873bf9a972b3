"""Reporters — rich terminal view and JSON."""
