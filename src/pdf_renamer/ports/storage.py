"""Storage port - interface for renaming files."""

from abc import ABC, abstractmethod
from pathlib import Path


class StoragePort(ABC):
    """Interface for file storage."""

    @abstractmethod
    def rename(self, path: Path, filename: str) -> Path:
        """Rename a file within its directory.

        Returns path to renamed file.
        """
        pass
