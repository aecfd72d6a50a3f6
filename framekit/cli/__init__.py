"""Command-line interface for framekit."""
