"""Rename PDF documents from their contents."""

__version__ = "0.1.0"
