"""Command-line interface for payledger."""
