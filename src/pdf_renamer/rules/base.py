"""Shared helpers for layout rules."""

import re
from collections.abc import Callable

from ..domain.models import Extraction, ExtractorDescriptor

_COLUMN_GAP = re.compile(r"\s{2,}")


def first_capture(pattern: str | re.Pattern[str], text: str, flags: int = 0) -> str:
    """Return the stripped first group of ``pattern`` in ``text``, or ``""``."""
    match = re.search(pattern, text, flags)
    return match.group(1).strip() if match else ""


def first_column(text: str) -> str:
    """Cut a layout line at the first run of two or more spaces."""
    return _COLUMN_GAP.split(text.strip(), maxsplit=1)[0]


def make_extractor(
    name: str,
    description: str,
    can_handle: Callable[[str], bool],
    get_date: Callable[[str], str],
    date_format: str,
    get_filename_prefix: Callable[[str], str],
    get_document_number: Callable[[str], str],
) -> ExtractorDescriptor:
    """Bundle a family's functions into a registry entry."""

    def extract(layout: str) -> Extraction:
        return Extraction(
            date=get_date(layout),
            date_format=date_format,
            filename_prefix=get_filename_prefix(layout),
            document_number=get_document_number(layout),
        )

    return ExtractorDescriptor(
        name=name,
        description=description,
        can_handle=can_handle,
        extract=extract,
    )
