"""Command-line and terminal interfaces for the poker grid puzzle."""
