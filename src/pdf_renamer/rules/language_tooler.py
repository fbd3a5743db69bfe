"""LanguageTooler invoices."""

import re

from .base import first_capture, first_column, make_extractor

DATE_FORMAT = "%d %b %Y"

_COMPANY = re.compile(r"^LanguageTooler[ \t]+\w+", re.MULTILINE)


def can_handle(text: str) -> bool:
    return "LanguageTooler" in text


def get_date(layout: str) -> str:
    return first_column(first_capture(r"Billed On\s*(.*)", layout))


def get_company_name(layout: str) -> str:
    match = _COMPANY.search(layout)
    return match.group(0).strip() if match else "LanguageTooler"


def get_filename_prefix(layout: str) -> str:
    return f"{get_company_name(layout)} - "


def get_document_number(layout: str) -> str:
    number = first_column(first_capture(r"Invoice #\s*(.*)", layout))
    return f"Invoice {number}" if number else ""


EXTRACTOR = make_extractor(
    name="LanguageTooler",
    description="Handles LanguageTooler invoice PDFs",
    can_handle=can_handle,
    get_date=get_date,
    date_format=DATE_FORMAT,
    get_filename_prefix=get_filename_prefix,
    get_document_number=get_document_number,
)
