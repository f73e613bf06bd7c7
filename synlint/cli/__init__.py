"""Command line interface for synlint."""
