"""Stripe-hosted invoices."""

from .base import first_capture, first_column, make_extractor

DATE_FORMAT = "%B %d, %Y"


def can_handle(text: str) -> bool:
    return "buildui.com" in text or ("Invoice number" in text and "Date due" in text)


def get_date(layout: str) -> str:
    return first_capture(r"Date due\s+([A-Za-z]+ \d+, \d{4})", layout)


def get_company_name(layout: str) -> str:
    """Issuer is the first unindented line after the "Date due" row."""
    found_date_due = False
    for line in layout.splitlines():
        if "Date due" in line:
            found_date_due = True
            continue
        if found_date_due and line.strip() and not line[0].isspace():
            return first_column(line)
    return "Stripe"


def get_filename_prefix(layout: str) -> str:
    return f"{get_company_name(layout)} - "


def get_document_number(layout: str) -> str:
    number = first_capture(r"Invoice number\s+(\w+)", layout)
    return f"Invoice {number}" if number else ""


EXTRACTOR = make_extractor(
    name="Stripe",
    description="Handles Stripe payment processor invoice PDFs",
    can_handle=can_handle,
    get_date=get_date,
    date_format=DATE_FORMAT,
    get_filename_prefix=get_filename_prefix,
    get_document_number=get_document_number,
)
