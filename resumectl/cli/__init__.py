"""Command-line interface for resumectl."""
