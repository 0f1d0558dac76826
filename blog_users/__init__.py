"""
Data-access layer for the `blog.users` MongoDB collection.
"""

__version__ = "0.1.0"
