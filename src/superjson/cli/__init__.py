"""Command-line interface for superjson."""
