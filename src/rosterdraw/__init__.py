"""Tournament team distribution toolkit."""

__version__ = "0.1.0"
