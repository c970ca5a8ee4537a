"""Command-line interface for photoctl."""
