"""Utility packages for entitykit."""
