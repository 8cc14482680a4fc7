"""Command-line interface for lintbridge."""
