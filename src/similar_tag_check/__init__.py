"""Find the latest registry tag that shares an image tag's formatting pattern."""

__version__ = "0.1.0"
