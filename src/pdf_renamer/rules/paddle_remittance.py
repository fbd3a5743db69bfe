"""Paddle.com remittance advice."""

from .base import first_capture, first_column, make_extractor

DATE_FORMAT = "%d %b %Y"
MARKER = "Remittance Advice"


def can_handle(text: str) -> bool:
    return MARKER in text


def get_date(layout: str) -> str:
    return first_column(first_capture(r"Payment Date:\s*(.*)", layout))


def get_filename_prefix(layout: str) -> str:
    return "Paddle.com - "


def get_document_number(layout: str) -> str:
    return MARKER


EXTRACTOR = make_extractor(
    name="PaddleRemittance",
    description="Handles Paddle.com remittance advice PDFs",
    can_handle=can_handle,
    get_date=get_date,
    date_format=DATE_FORMAT,
    get_filename_prefix=get_filename_prefix,
    get_document_number=get_document_number,
)
