"""Command-line interface for dotkit."""
