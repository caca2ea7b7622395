"""
Utility functions used by this package.
"""
