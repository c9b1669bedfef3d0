"""
fourinarow.interfaces - User interfaces for the Four-in-a-Row device

This package contains the command-line front end.
"""

# Don't import anything here to avoid circular imports
__all__ = []
