"""Domain services - orchestrate business logic."""

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from ..ports.llm import LLMPort
from ..ports.storage import StoragePort
from ..ports.text import TextExtractionPort
from ..prompts import SYSTEM_PROMPT, build_system_prompt, build_user_prompt
from ..rules import EXTRACTORS, select_extractor
from .dates import convert_date
from .errors import (
    ExtractionFailedError,
    MalformedModelResponseError,
    ModelRequestError,
    RenamerError,
    UnrecognizedDocumentError,
)
from .models import (
    DEFAULT_DESCRIPTION,
    UNKNOWN_ISSUER,
    DateInfo,
    Description,
    DocumentNumber,
    DocumentRecord,
    Extraction,
    ExtractionMethod,
    ExtractorDescriptor,
    Issuer,
    RenameResult,
    Stage,
)
from .normalizer import normalize, parse_model_response
from .template import FilenameTemplate

logger = logging.getLogger(__name__)

GITHUB_RECEIPT = re.compile(r"^github-(.*)-receipt-\d{4}-\d{2}-\d{2}\.pdf$")
LEADING_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def describe_from_filename(filename: str) -> str:
    """Derive a description from an existing filename.

    ``github-acme-receipt-2024-01-03.pdf`` becomes ``acme-receipt``; a
    leading ``yyyy-mm-dd`` is dropped; anything else keeps its stem.
    """
    match = GITHUB_RECEIPT.match(filename)
    if match:
        return f"{match.group(1)}-receipt"

    stem = Path(filename).stem
    stripped = LEADING_DATE.sub("", stem).strip(" -_")
    return stripped or stem or DEFAULT_DESCRIPTION


def issuer_from_prefix(prefix: str) -> str:
    """Strip the trailing separator from a filename prefix."""
    name = prefix.strip()
    if name.endswith("-"):
        name = name[:-1].rstrip()
    return name or UNKNOWN_ISSUER


def build_rule_record(extraction: Extraction, iso_date: str, original_path: Path) -> DocumentRecord:
    """Build a DocumentRecord from a rule extraction and its ISO date."""
    details = extraction.document_number.strip()
    return DocumentRecord(
        date=DateInfo.from_iso(iso_date),
        issuer=Issuer(name=issuer_from_prefix(extraction.filename_prefix)),
        document_number=DocumentNumber(value=details),
        description=Description(oneline=details or describe_from_filename(original_path.name)),
    )


class RenamingService:
    """Orchestrates classification, extraction, normalization and rendering."""

    def __init__(
        self,
        text: TextExtractionPort,
        llm: LLMPort | None = None,
        storage: StoragePort | None = None,
        template: FilenameTemplate | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        addon_prompt: str = "",
        extractors: Sequence[ExtractorDescriptor] = EXTRACTORS,
        date_converter: Callable[[str, str], str] = convert_date,
    ) -> None:
        self.text = text
        self.llm = llm
        self.storage = storage
        self.template = template or FilenameTemplate()
        self.system_prompt = build_system_prompt(system_prompt, addon_prompt)
        self.extractors = extractors
        self.date_converter = date_converter

    def process(self, path: Path, dry_run: bool = False) -> RenameResult:
        """Process a document through the full pipeline.

        Pipeline:
            1. Extract text
            2. Classify with the rule extractors
            3. Rule extraction and date conversion, or model extraction
               and normalization when no rule matches
            4. Render the filename
            5. Rename (unless dry_run)

        Failures never raise: the result carries the error instead.
        """
        result = RenameResult(source_path=path)
        logger.info(f"Processing PDF file: {path.name}")

        try:
            text = self._extract_text(path)
            result.text_length = len(text)

            extractor = select_extractor(text, self.extractors)
            result.stage = Stage.CLASSIFIED

            if extractor:
                record = self._extract_with_rule(path, extractor, result)
            elif self.llm:
                record = self._extract_with_model(text, result)
            else:
                raise UnrecognizedDocumentError()

            result.record = record
            result.stage = Stage.NORMALIZED

            rendered = self.template.render_with_tier(record, path)
            result.filename = rendered.filename
            result.render_tier = rendered.tier
            result.stage = Stage.RENDERED

            if self.storage and not dry_run:
                result.target_path = self.storage.rename(path, rendered.filename)

        except RenamerError as e:
            logger.error(f"Error: {e}")
            self._fail(result, e)
        except Exception as e:
            logger.exception(f"Error processing file {path}: {e}")
            self._fail(result, e)

        return result

    def process_many(self, paths: Iterable[Path], dry_run: bool = False) -> list[RenameResult]:
        """Process documents one after another; failures do not stop the batch."""
        return [self.process(path, dry_run=dry_run) for path in paths]

    def _extract_text(self, path: Path) -> str:
        text = self.text.extract_text(path)
        if not text or not text.strip():
            raise ExtractionFailedError("Failed to extract text content from PDF")
        return text

    def _extract_with_rule(
        self, path: Path, extractor: ExtractorDescriptor, result: RenameResult
    ) -> DocumentRecord:
        result.method = ExtractionMethod.RULE
        result.extractor = extractor.name
        logger.info(f"Matched extractor: {extractor.name}")

        extraction = extractor.extract(self.text.extract_layout_text(path))
        result.stage = Stage.RULE_EXTRACTED

        iso_date = self.date_converter(extraction.date, extraction.date_format)
        return build_rule_record(extraction, iso_date, path)

    def _extract_with_model(self, text: str, result: RenameResult) -> DocumentRecord:
        result.method = ExtractionMethod.MODEL
        logger.info("No extractor matched, analyzing with language model")

        result.prompt = build_user_prompt(text)
        result.raw_response = self.llm.complete(self.system_prompt, result.prompt)

        data = parse_model_response(result.raw_response)
        result.raw_data = data
        result.stage = Stage.MODEL_EXTRACTED

        return normalize(data)

    def _fail(self, result: RenameResult, error: Exception) -> None:
        result.error = error
        result.failed_at = result.stage
        result.stage = Stage.FAILED
        if isinstance(error, (ModelRequestError, MalformedModelResponseError)):
            result.raw_response = result.raw_response or error.raw_response
