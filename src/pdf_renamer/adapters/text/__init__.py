"""Text extraction adapters."""

from .pdftotext import PdftotextAdapter

__all__ = ["PdftotextAdapter"]
