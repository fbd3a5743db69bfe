"""CLI entry point for pdf-renamer."""

import logging
import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .adapters.diagnostics import write_failure_report
from .adapters.llm import create_llm_adapter
from .adapters.storage import FilesystemAdapter
from .adapters.text import PdftotextAdapter
from .config import LLMProvider, Settings, load_settings
from .domain.models import RenameResult
from .domain.services import RenamingService
from .domain.template import FilenameTemplate
from .rules import describe_extractors


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def collect_pdfs(path: Path, recursive: bool) -> list[Path]:
    """Collect PDF files from path (file or directory)."""
    if path.is_file():
        return [path] if path.suffix.lower() == ".pdf" else []
    pattern = "**/*" if recursive else "*"
    return sorted(p for p in path.glob(pattern) if p.is_file() and p.suffix.lower() == ".pdf")


def build_overrides(
    provider: str | None = None,
    model: str | None = None,
    base_url: str | None = None,
    template: str | None = None,
    fallback_template: str | None = None,
    sanitize: bool | None = None,
    failure_dir: Path | None = None,
) -> dict[str, Any]:
    """Turn CLI options into a settings layer; unset options stay None."""
    return {
        "llm": {"provider": provider, "model": model, "base_url": base_url},
        "filename": {
            "template": template,
            "fallback_template": fallback_template,
            "sanitize": sanitize,
        },
        "log": {"failure_dir": failure_dir},
    }


def create_service(settings: Settings) -> RenamingService:
    """Create a RenamingService with configured adapters."""
    return RenamingService(
        text=PdftotextAdapter(binary=settings.pdf.pdftotext, max_size=settings.pdf.max_size),
        llm=create_llm_adapter(settings.llm),
        storage=FilesystemAdapter(),
        template=FilenameTemplate(
            template=settings.filename.template,
            fallback_template=settings.filename.fallback_template,
            sanitize=settings.filename.sanitize,
        ),
        system_prompt=settings.llm.system_prompt,
        addon_prompt=settings.llm.addon_prompt,
    )


def report(result: RenameResult, dry_run: bool) -> None:
    name = result.source_path.name
    if result.success:
        target = result.target_path.name if result.target_path else result.filename
        arrow = "would be renamed to" if dry_run else "->"
        click.echo(f"✓ {name} {arrow} {target}")
        if result.degraded:
            click.echo(f"  (filename from {result.render_tier.value} template)")
    else:
        click.echo(f"✗ {name}: {result.error}", err=True)


@click.group()
@click.version_option(__version__, "--version")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """PDF Renamer - rename PDF invoices with meaningful filenames."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option("--recursive/--no-recursive", default=True, help="Search folders recursively")
@click.option("--dry-run", is_flag=True, help="Show new names without renaming")
@click.option(
    "--provider",
    type=click.Choice([p.value for p in LLMProvider]),
    help="LLM provider for unrecognized documents",
)
@click.option("--model", help="LLM model name")
@click.option("--base-url", help="Ollama base URL")
@click.option("--template", help="Filename template, e.g. '{{date.full}} - {{issuer.name}}.pdf'")
@click.option("--fallback-template", help="Template used when the main one fails")
@click.option("--sanitize/--no-sanitize", default=None, help="Replace unsafe characters")
@click.option(
    "--failure-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write YAML reports for failed documents here",
)
@click.pass_context
def rename(
    ctx: click.Context,
    paths: tuple[Path, ...],
    recursive: bool,
    dry_run: bool,
    provider: str | None,
    model: str | None,
    base_url: str | None,
    template: str | None,
    fallback_template: str | None,
    sanitize: bool | None,
    failure_dir: Path | None,
) -> None:
    """Rename PDF files (or all PDFs in folders) from their contents."""
    overrides = build_overrides(
        provider=provider,
        model=model,
        base_url=base_url,
        template=template,
        fallback_template=fallback_template,
        sanitize=sanitize,
        failure_dir=failure_dir,
    )
    settings = load_settings(ctx.obj["config_path"], overrides)

    pdfs = [pdf for path in paths for pdf in collect_pdfs(path, recursive)]
    if not pdfs:
        click.echo("No PDF files found")
        return

    service = create_service(settings)

    success_count = 0
    error_count = 0

    for pdf in pdfs:
        result = service.process(pdf, dry_run=dry_run)
        report(result, dry_run)
        if result.success:
            success_count += 1
            continue

        error_count += 1
        if settings.log.failure_dir:
            report_path = write_failure_report(result, settings.log.failure_dir)
            click.echo(f"  report: {report_path}", err=True)

    click.echo(f"\nRenamed: {success_count} success, {error_count} errors")
    if error_count:
        sys.exit(1)


@cli.command()
def extractors() -> None:
    """List rule extractors in the order they are tried."""
    click.echo("The following rule extractors are available for PDF recognition:")
    for name, description in describe_extractors():
        click.echo(f"- {name:<20} {description}")


if __name__ == "__main__":
    cli()
