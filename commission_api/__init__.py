"""Commission API - tiered sales commission reporting service."""

__version__ = "1.0.0"
