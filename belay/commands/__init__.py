"""Command handlers for the belay CLI."""
