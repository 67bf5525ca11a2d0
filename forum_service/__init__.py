"""REST backend for subreddits and posts."""

__version__ = "0.1.0"
