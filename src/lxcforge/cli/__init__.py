"""Command-line interface for lxcforge."""
