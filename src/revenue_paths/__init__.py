"""Explore which pipeline deals can combine to reach a revenue target."""

__version__ = "0.1.0"
