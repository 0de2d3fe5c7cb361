"""Command-line time logging for Teamwork."""

__version__ = "0.9.9"

__all__ = ["__version__"]
