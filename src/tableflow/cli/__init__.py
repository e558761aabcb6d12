"""Command-line interface for tableflow."""
