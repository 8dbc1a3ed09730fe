"""Producer version written into every snapshot header."""

__version__ = "0.1.0"
