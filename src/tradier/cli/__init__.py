"""Command-line interface for Tradier."""
