"""Lexical distance between languages from large wordlists."""

__version__ = "0.1.0"
