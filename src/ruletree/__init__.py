"""
ruletree: Rule configuration persistence for clustered database proxies.

Converts rule configuration objects into path-addressed tuples for a
coordination tree, and rebuilds configuration objects from those tuples.
"""

__version__ = "0.1.0"
