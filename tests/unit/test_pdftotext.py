"""Unit tests for the pdftotext adapter."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pdf_renamer.adapters.text import PdftotextAdapter
from pdf_renamer.domain.errors import ExtractionFailedError


@pytest.fixture
def pdf(tmp_path: Path) -> Path:
    path = tmp_path / "scan.pdf"
    path.write_bytes(b"%PDF-1.4")
    return path


class TestPdftotextAdapter:
    """Tests for PdftotextAdapter."""

    def test_plain_text(self, pdf: Path) -> None:
        completed = MagicMock(stdout="Invoice text")
        with patch("subprocess.run", return_value=completed) as run:
            assert PdftotextAdapter().extract_text(pdf) == "Invoice text"
        assert run.call_args.args[0] == ["pdftotext", "-q", str(pdf), "-"]

    def test_layout_text(self, pdf: Path) -> None:
        completed = MagicMock(stdout="Invoice   text")
        with patch("subprocess.run", return_value=completed) as run:
            assert PdftotextAdapter(binary="/opt/pdftotext").extract_layout_text(pdf) == (
                "Invoice   text"
            )
        assert run.call_args.args[0] == ["/opt/pdftotext", "-q", "-layout", str(pdf), "-"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionFailedError, match="not found"):
            PdftotextAdapter().extract_text(tmp_path / "nope.pdf")

    def test_file_too_large(self, pdf: Path) -> None:
        with pytest.raises(ExtractionFailedError, match="too large"):
            PdftotextAdapter(max_size=4).extract_text(pdf)

    def test_binary_not_installed(self, pdf: Path) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ExtractionFailedError, match="not installed"):
                PdftotextAdapter().extract_text(pdf)

    def test_binary_fails(self, pdf: Path) -> None:
        error = subprocess.CalledProcessError(1, ["pdftotext"], stderr="Syntax Error")
        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ExtractionFailedError, match="Syntax Error"):
                PdftotextAdapter().extract_text(pdf)
