"""Liaison: versioned relationship documents for messaging users.

Each owner keeps one document listing their relationships and a
monotonic version counter that advances on every accepted change.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
