"""Filename templates with cascading fallback and sanitization.

Templates are rendered with jinja2, e.g. ``{{date.full}} - {{issuer.name}}.pdf``.
A variable that is missing renders as ``undefined`` and one that is ``None``
as ``null``. Any output containing either marker is unusable and rendering
moves on to the next tier.
"""

import copy
import logging
import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from jinja2 import ChainableUndefined, Environment, TemplateError

from .models import (
    DEFAULT_DESCRIPTION,
    UNKNOWN_ISSUER,
    DocumentRecord,
    RenderedFilename,
    RenderTier,
)
from .normalizer import fold_aliases

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = (
    "{{date.yyyy}}-{{date.mm}}-{{date.dd}} - {{company.name}} - {{description.oneline}}.pdf"
)
DEFAULT_FALLBACK_TEMPLATE = "{{date.full}} - Unnamed Invoice.pdf"

MAX_LENGTH = 255
PDF_SUFFIX = ".pdf"
UNDEFINED = "undefined"
NULL = "null"

_UNSAFE = re.compile(r'[\\/:*?"<>|]')

RecordInput = DocumentRecord | Mapping[str, Any] | None


def sanitize_part(text: str) -> str:
    """Replace path-unsafe characters in a single value."""
    return _UNSAFE.sub("_", text)


def sanitize_filename(name: str) -> str:
    """Make a rendered filename safe. Applying it twice changes nothing."""
    name = sanitize_part(name)
    name = re.sub(r"\s+", " ", name)
    name = re.sub(r"_+", "_", name)
    name = re.sub(r"-+", "-", name)
    name = name.strip()
    return name[:MAX_LENGTH].strip()


def ensure_pdf_suffix(name: str) -> str:
    if name.lower().endswith(PDF_SUFFIX):
        return name
    if len(name) + len(PDF_SUFFIX) > MAX_LENGTH:
        name = name[: MAX_LENGTH - len(PDF_SUFFIX)].rstrip()
    return name + PDF_SUFFIX


def _sanitize_values(section: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: sanitize_part(value) if isinstance(value, str) else value
        for key, value in section.items()
    }


def build_context(record: RecordInput, original_path: Path) -> dict[str, Any]:
    """Build the render context: a defaulted, path-safe copy of the record."""
    if isinstance(record, DocumentRecord):
        data = record.to_dict()
    elif isinstance(record, Mapping):
        data = fold_aliases(copy.deepcopy(dict(record)))
    else:
        data = {}

    today = date.today()
    defaults = {
        "date": {
            "yyyy": f"{today.year:04d}",
            "mm": f"{today.month:02d}",
            "dd": f"{today.day:02d}",
            "full": today.isoformat(),
        },
        "issuer": {"name": UNKNOWN_ISSUER},
        "documentNumber": {"value": ""},
        "description": {"oneline": DEFAULT_DESCRIPTION},
    }
    for key, default in defaults.items():
        if not isinstance(data.get(key), Mapping):
            data[key] = default

    description = dict(data["description"])
    if not description.get("oneline"):
        description["oneline"] = DEFAULT_DESCRIPTION
    data["description"] = description

    context = {key: _sanitize_values(data[key]) for key in defaults}
    context["company"] = context["issuer"]
    number = context["documentNumber"]
    context["invoice"] = {"number": number["value"]} if "value" in number else {}
    context["original"] = {
        "name": sanitize_part(original_path.name),
        "stem": sanitize_part(original_path.stem),
    }
    return context


class MarkedUndefined(ChainableUndefined):
    """Missing variables, however deeply dotted, render as ``undefined``."""

    def __str__(self) -> str:
        return UNDEFINED


def _finalize(value: Any) -> Any:
    return NULL if value is None else value


_environment = Environment(
    undefined=MarkedUndefined,
    finalize=_finalize,
    keep_trailing_newline=True,
)


def render_template(template: str, context: Mapping[str, Any]) -> str:
    return _environment.from_string(template).render(context)


def is_usable(filename: str) -> bool:
    """A rendering is usable when it is not blank and carries no failure marker."""
    return bool(filename.strip()) and UNDEFINED not in filename and NULL not in filename


def _timestamp(now: datetime) -> str:
    return now.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-").replace("T", "-")


class FilenameTemplate:
    """Render DocumentRecords into filenames."""

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        fallback_template: str = DEFAULT_FALLBACK_TEMPLATE,
        sanitize: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.template = template
        self.fallback_template = fallback_template
        self.sanitize = sanitize
        self.clock = clock or (lambda: datetime.now(UTC))

    def render(self, record: RecordInput, original_path: Path) -> str:
        return self.render_with_tier(record, original_path).filename

    def render_with_tier(self, record: RecordInput, original_path: Path) -> RenderedFilename:
        """Render through the primary, fallback and last-resort tiers. Never raises."""
        original_path = Path(original_path)
        try:
            filename, tier = self._render(record, original_path)
            if self.sanitize:
                filename = sanitize_filename(filename)
            return RenderedFilename(ensure_pdf_suffix(filename), tier)
        except Exception as e:
            logger.exception(f"Error generating filename: {e}")
            return RenderedFilename(f"renamed-{original_path.name}", RenderTier.EMERGENCY)

    def _render(self, record: RecordInput, original_path: Path) -> tuple[str, RenderTier]:
        context = build_context(record, original_path)

        filename = self._try_render(self.template, context)
        if filename is not None:
            return filename, RenderTier.PRIMARY

        logger.warning("Template generation failed, using fallback template")
        filename = self._try_render(self.fallback_template, context)
        if filename is not None:
            return filename, RenderTier.FALLBACK

        logger.warning("Fallback template failed, using timestamped original name")
        return f"{_timestamp(self.clock())}-{original_path.name}", RenderTier.LAST_RESORT

    def _try_render(self, template: str, context: Mapping[str, Any]) -> str | None:
        try:
            filename = render_template(template, context)
        except TemplateError as e:
            logger.warning(f"Invalid filename template {template!r}: {e}")
            return None
        return filename if is_usable(filename) else None
