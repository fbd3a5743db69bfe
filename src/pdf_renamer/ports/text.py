"""Text extraction port - interface for PDF to text conversion."""

from abc import ABC, abstractmethod
from pathlib import Path


class TextExtractionPort(ABC):
    """Interface for PDF text extraction."""

    @abstractmethod
    def extract_text(self, path: Path) -> str:
        """Extract plain text content from PDF."""
        pass

    @abstractmethod
    def extract_layout_text(self, path: Path) -> str:
        """Extract text with the physical page layout preserved."""
        pass
