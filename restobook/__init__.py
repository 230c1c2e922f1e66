"""Restaurant discovery and table reservation client."""

__version__ = "0.1.0"
