"""YAML failure reports for documents that could not be renamed."""

import logging
from datetime import datetime
from pathlib import Path

import yaml

from ...domain.models import RenameResult

logger = logging.getLogger(__name__)


def build_failure_report(result: RenameResult) -> dict:
    error = result.error
    return {
        "source_file": str(result.source_path),
        "stage": (result.failed_at or result.stage).value,
        "method": result.method.value if result.method else None,
        "extractor": result.extractor,
        "error_type": type(error).__name__ if error else None,
        "error": str(error) if error else None,
        "prompt": result.prompt,
        "raw_response": result.raw_response,
        "processed_at": datetime.now().isoformat(),
    }


def write_failure_report(result: RenameResult, directory: Path) -> Path:
    """Write a YAML report for a failed document. Returns the report path."""
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_path = directory / f"{timestamp}_{result.source_path.stem}.yaml"

    counter = 1
    while report_path.exists():
        report_path = directory / f"{timestamp}_{result.source_path.stem} ({counter}).yaml"
        counter += 1

    logger.info(f"Writing failure report: {report_path.name}")
    report_path.write_text(
        yaml.dump(
            build_failure_report(result),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
    )
    return report_path
