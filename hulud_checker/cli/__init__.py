"""Command-line interface for hulud-checker."""
