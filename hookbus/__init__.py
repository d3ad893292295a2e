"""
hookbus package.

In-process hook registry with exact-name and pattern subscriptions.
"""

__version__ = "0.1.0"
