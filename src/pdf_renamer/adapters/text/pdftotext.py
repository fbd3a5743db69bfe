"""Text extraction adapter using poppler's pdftotext."""

import logging
import subprocess
from pathlib import Path

from ...domain.errors import ExtractionFailedError
from ...ports.text import TextExtractionPort

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10 * 1024 * 1024


class PdftotextAdapter(TextExtractionPort):
    """Text extraction implementation using the pdftotext CLI."""

    def __init__(self, binary: str = "pdftotext", max_size: int = DEFAULT_MAX_SIZE) -> None:
        self.binary = binary
        self.max_size = max_size

    def extract_text(self, path: Path) -> str:
        return self._run(path, layout=False)

    def extract_layout_text(self, path: Path) -> str:
        return self._run(path, layout=True)

    def _check_source(self, path: Path) -> None:
        if not path.is_file():
            raise ExtractionFailedError(f"PDF file not found: {path}")
        size = path.stat().st_size
        if size > self.max_size:
            raise ExtractionFailedError(
                f"PDF file too large: {size} bytes (max: {self.max_size} bytes)"
            )

    def _run(self, path: Path, layout: bool) -> str:
        self._check_source(path)

        args = [self.binary, "-q"]
        if layout:
            args.append("-layout")
        args += [str(path), "-"]

        logger.debug(f"Extracting text{' (layout)' if layout else ''}: {path.name}")
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ExtractionFailedError(
                f"{self.binary} is not installed or not in your PATH"
            ) from e
        except subprocess.CalledProcessError as e:
            raise ExtractionFailedError(
                f"Error extracting text from PDF: {e.stderr.strip() or e}"
            ) from e

        return result.stdout
