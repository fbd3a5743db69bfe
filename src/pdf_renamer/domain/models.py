"""Domain models."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

UNKNOWN_ISSUER = "Unknown Company"
DEFAULT_DESCRIPTION = "Document"


@dataclass(frozen=True)
class DateInfo:
    """Document date as zero-padded parts plus ISO form."""

    yyyy: str
    mm: str
    dd: str
    full: str  # yyyy-mm-dd

    @classmethod
    def from_iso(cls, full: str) -> "DateInfo":
        parts = full.split("-")
        if len(parts) != 3:
            return cls(yyyy="", mm="", dd="", full=full)
        return cls(yyyy=parts[0], mm=parts[1], dd=parts[2], full=full)


@dataclass(frozen=True)
class Issuer:
    name: str = UNKNOWN_ISSUER


@dataclass(frozen=True)
class DocumentNumber:
    value: str = ""


@dataclass(frozen=True)
class Description:
    oneline: str = DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class DocumentRecord:
    """Complete structured result for one document."""

    date: DateInfo
    issuer: Issuer
    document_number: DocumentNumber
    description: Description

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "date": {
                "yyyy": self.date.yyyy,
                "mm": self.date.mm,
                "dd": self.date.dd,
                "full": self.date.full,
            },
            "issuer": {"name": self.issuer.name},
            "documentNumber": {"value": self.document_number.value},
            "description": {"oneline": self.description.oneline},
        }


@dataclass(frozen=True)
class Extraction:
    """Raw fields pulled out of a known layout by a rule extractor."""

    date: str
    date_format: str
    filename_prefix: str
    document_number: str


@dataclass(frozen=True)
class ExtractorDescriptor:
    """Named capability: detects a layout and extracts its fields."""

    name: str
    description: str
    can_handle: Callable[[str], bool]
    extract: Callable[[str], Extraction]


class ExtractionMethod(str, Enum):
    RULE = "rule"
    MODEL = "model"


class Stage(str, Enum):
    """Pipeline states a document moves through."""

    PENDING = "pending"
    CLASSIFIED = "classified"
    RULE_EXTRACTED = "rule_extracted"
    MODEL_EXTRACTED = "model_extracted"
    NORMALIZED = "normalized"
    RENDERED = "rendered"
    FAILED = "failed"


class RenderTier(str, Enum):
    """Which template strategy produced a filename."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    LAST_RESORT = "last_resort"
    EMERGENCY = "emergency"


@dataclass(frozen=True)
class RenderedFilename:
    filename: str
    tier: RenderTier = RenderTier.PRIMARY

    @property
    def degraded(self) -> bool:
        return self.tier != RenderTier.PRIMARY


@dataclass
class RenameResult:
    """Result of running one document through the pipeline."""

    source_path: Path
    stage: Stage = Stage.PENDING
    method: ExtractionMethod | None = None
    extractor: str | None = None
    record: DocumentRecord | None = None
    filename: str | None = None
    render_tier: RenderTier | None = None
    target_path: Path | None = None
    failed_at: Stage | None = None
    error: Exception | None = None
    prompt: str | None = None  # Sent to the model, kept for diagnostics
    raw_response: str | None = None
    raw_data: Any = None
    text_length: int = 0

    @property
    def success(self) -> bool:
        return self.error is None and self.filename is not None

    @property
    def degraded(self) -> bool:
        return self.render_tier not in (None, RenderTier.PRIMARY)
