"""Command-line interface for Verdant."""
