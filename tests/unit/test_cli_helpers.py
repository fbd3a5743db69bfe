"""Unit tests for CLI helper functions and commands."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from pdf_renamer.__main__ import build_overrides, cli, collect_pdfs, create_service
from pdf_renamer.adapters.llm import OllamaAdapter
from pdf_renamer.config import load_settings
from pdf_renamer.domain.errors import UnrecognizedDocumentError
from pdf_renamer.domain.models import RenameResult, RenderTier, Stage
from pdf_renamer.domain.services import RenamingService


class TestCollectPdfs:
    """Tests for collect_pdfs."""

    def test_single_pdf_file(self, tmp_path: Path) -> None:
        pdf = tmp_path / "test.pdf"
        pdf.touch()
        assert collect_pdfs(pdf, recursive=False) == [pdf]

    def test_single_non_pdf_file(self, tmp_path: Path) -> None:
        txt = tmp_path / "test.txt"
        txt.touch()
        assert collect_pdfs(txt, recursive=False) == []

    def test_uppercase_suffix(self, tmp_path: Path) -> None:
        pdf = tmp_path / "SCAN.PDF"
        pdf.touch()
        assert collect_pdfs(tmp_path, recursive=False) == [pdf]

    def test_directory_non_recursive(self, tmp_path: Path) -> None:
        (tmp_path / "a.pdf").touch()
        (tmp_path / "b.pdf").touch()
        subdir = tmp_path / "sub"
        subdir.mkdir()
        (subdir / "c.pdf").touch()

        result = collect_pdfs(tmp_path, recursive=False)
        assert len(result) == 2
        assert all(p.parent == tmp_path for p in result)

    def test_directory_recursive(self, tmp_path: Path) -> None:
        (tmp_path / "a.pdf").touch()
        subdir = tmp_path / "sub"
        subdir.mkdir()
        (subdir / "b.pdf").touch()

        result = collect_pdfs(tmp_path, recursive=True)
        assert len(result) == 2

    def test_returns_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "z.pdf").touch()
        (tmp_path / "a.pdf").touch()
        (tmp_path / "m.pdf").touch()

        result = collect_pdfs(tmp_path, recursive=False)
        names = [p.name for p in result]
        assert names == ["a.pdf", "m.pdf", "z.pdf"]


class TestBuildOverrides:
    """Tests for build_overrides."""

    def test_unset_options_are_none(self) -> None:
        overrides = build_overrides()
        assert overrides["llm"] == {"provider": None, "model": None, "base_url": None}
        assert overrides["filename"]["sanitize"] is None

    def test_set_options(self) -> None:
        overrides = build_overrides(provider="none", template="{{date.full}}", sanitize=False)
        assert overrides["llm"]["provider"] == "none"
        assert overrides["filename"]["template"] == "{{date.full}}"
        assert overrides["filename"]["sanitize"] is False


class TestCreateService:
    def test_wires_configured_adapters(self, tmp_path: Path) -> None:
        settings = load_settings(
            tmp_path / "missing.toml",
            {"llm": {"provider": "ollama", "addon_prompt": "German invoices"}},
        )
        service = create_service(settings)
        assert isinstance(service, RenamingService)
        assert isinstance(service.llm, OllamaAdapter)
        assert service.system_prompt.endswith("German invoices")

    def test_no_provider(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "missing.toml", {"llm": {"provider": "none"}})
        assert create_service(settings).llm is None


class TestCommands:
    """Tests for the click commands."""

    @pytest.fixture
    def service(self) -> MagicMock:
        return MagicMock(spec=RenamingService)

    def test_extractors(self) -> None:
        result = CliRunner().invoke(cli, ["extractors"])
        assert result.exit_code == 0
        assert "PaddleRemittance" in result.output
        assert result.output.index("PaddleRemittance") < result.output.index("Stripe")

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_rename_dry_run(self, tmp_path: Path, service: MagicMock) -> None:
        pdf = tmp_path / "scan.pdf"
        pdf.touch()
        service.process.return_value = RenameResult(
            source_path=pdf,
            stage=Stage.RENDERED,
            filename="2024-01-03 - Acme - Hosting.pdf",
            render_tier=RenderTier.PRIMARY,
        )

        with patch("pdf_renamer.__main__.create_service", return_value=service):
            result = CliRunner().invoke(cli, ["rename", "--dry-run", str(tmp_path)])

        assert result.exit_code == 0
        assert "would be renamed to 2024-01-03 - Acme - Hosting.pdf" in result.output
        service.process.assert_called_once_with(pdf, dry_run=True)

    def test_rename_failure_writes_report(self, tmp_path: Path, service: MagicMock) -> None:
        pdf = tmp_path / "scan.pdf"
        pdf.touch()
        service.process.return_value = RenameResult(
            source_path=pdf,
            stage=Stage.FAILED,
            failed_at=Stage.CLASSIFIED,
            error=UnrecognizedDocumentError(),
        )
        reports = tmp_path / "reports"

        with patch("pdf_renamer.__main__.create_service", return_value=service):
            result = CliRunner().invoke(
                cli, ["rename", "--failure-dir", str(reports), str(pdf)]
            )

        assert result.exit_code == 1
        assert "Unable to recognize PDF type" in result.output
        assert len(list(reports.glob("*.yaml"))) == 1

    def test_rename_no_pdfs(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["rename", str(tmp_path)])
        assert result.exit_code == 0
        assert "No PDF files found" in result.output
