"""Run your CI checks locally before you push."""

__version__ = "0.1.0"
