"""Paddle.com invoices."""

from .base import first_capture, first_column, make_extractor
from .paddle_remittance import MARKER as REMITTANCE_MARKER

DATE_FORMAT = "%d %b %Y"


def can_handle(text: str) -> bool:
    # Remittance advices mention Paddle.com too
    return "Paddle.com" in text and REMITTANCE_MARKER not in text


def get_date(layout: str) -> str:
    return first_column(first_capture(r"Invoice Date:\s*(.*)", layout))


def get_filename_prefix(layout: str) -> str:
    # "Invoice to:" names the customer, Paddle is the merchant of record
    return "Paddle - "


def get_document_number(layout: str) -> str:
    number = first_column(first_capture(r"Invoice Number:\s*(.*)", layout))
    return f"Invoice {number}" if number else ""


EXTRACTOR = make_extractor(
    name="Paddle",
    description="Handles Paddle.com invoice PDFs",
    can_handle=can_handle,
    get_date=get_date,
    date_format=DATE_FORMAT,
    get_filename_prefix=get_filename_prefix,
    get_document_number=get_document_number,
)
