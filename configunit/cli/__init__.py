"""Command line interface for configunit."""
