"""pf-docs - local full-text index of Point-Free documentation and code."""

__version__ = "0.3.0"
