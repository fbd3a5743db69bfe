"""Storage adapter using local filesystem."""

import logging
from pathlib import Path

from ...ports.storage import StoragePort

logger = logging.getLogger(__name__)


def unique_destination(dest: Path) -> Path:
    """Append " (n)" to the stem until ``dest`` does not exist."""
    if not dest.exists():
        return dest

    counter = 1
    candidate = dest
    while candidate.exists():
        candidate = dest.with_name(f"{dest.stem} ({counter}){dest.suffix}")
        counter += 1
    return candidate


class FilesystemAdapter(StoragePort):
    """Rename files in place on the local filesystem."""

    def rename(self, path: Path, filename: str) -> Path:
        """Rename ``path`` to ``filename`` in the same directory."""
        dest = path.with_name(filename)

        if dest == path:
            logger.info(f"Already named: {path.name}")
            return path

        dest = unique_destination(dest)
        path.rename(dest)
        logger.info(f"Renamed: {path.name} -> {dest.name}")

        return dest
