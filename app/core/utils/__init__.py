"""
Core Utilities
==============
Logging helpers shared by every layer of the application.
"""

__all__ = ["logging"]
