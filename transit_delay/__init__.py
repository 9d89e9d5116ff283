"""Transit delay prediction API."""

__version__ = "0.1.0"
