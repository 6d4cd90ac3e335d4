"""Merge or rebase pull requests based on their labels."""

__version__ = "0.1.0"
