"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pdf_renamer.domain.models import (
    DateInfo,
    Description,
    DocumentNumber,
    DocumentRecord,
    Issuer,
)
from pdf_renamer.domain.template import FilenameTemplate
from pdf_renamer.ports.llm import LLMPort
from pdf_renamer.ports.storage import StoragePort
from pdf_renamer.ports.text import TextExtractionPort

REMITTANCE_TEXT = """\
Paddle.com Market Ltd
Remittance Advice
Payment Date: 03 Jan 2024
Amount paid:  120.00 USD
"""

PADDLE_TEXT = """\
Paddle.com Market Ltd                         Invoice Number: 12345-678
Invoice Date: 15 Mar 2024
Invoice to:
    Jane Doe
"""

LANGUAGETOOLER_TEXT = """\
LanguageTooler GmbH
Invoice # LT-2024-001
Billed On   05 Feb 2024      Total  49.00 EUR
"""

STRIPE_TEXT = """\
Invoice
Invoice number    ABCD1234
Date of issue     March 1, 2024
Date due          March 15, 2024

Acme Studio Inc.              Bill to
123 Main St                   Jane Doe
"""

UNKNOWN_TEXT = "Dear customer, thank you for shopping with Corner Bakery."

SAMPLE_TEXTS = {
    "remittance": REMITTANCE_TEXT,
    "paddle": PADDLE_TEXT,
    "languagetooler": LANGUAGETOOLER_TEXT,
    "stripe": STRIPE_TEXT,
    "unknown": UNKNOWN_TEXT,
    "empty": "",
}

FIXED_NOW = datetime(2024, 1, 3, 12, 30, 45, tzinfo=UTC)


@pytest.fixture
def sample_record() -> DocumentRecord:
    """Sample document record for testing."""
    return DocumentRecord(
        date=DateInfo(yyyy="2024", mm="03", dd="15", full="2024-03-15"),
        issuer=Issuer(name="Acme Corp"),
        document_number=DocumentNumber(value="INV-12345"),
        description=Description(oneline="Monthly subscription"),
    )


@pytest.fixture
def fixed_template() -> FilenameTemplate:
    """Default templates with a frozen clock."""
    return FilenameTemplate(clock=lambda: FIXED_NOW)


@pytest.fixture
def mock_text() -> MagicMock:
    """Mock text extraction port returning the same text for both modes."""
    mock = MagicMock(spec=TextExtractionPort)
    mock.extract_text.return_value = REMITTANCE_TEXT
    mock.extract_layout_text.return_value = REMITTANCE_TEXT
    return mock


@pytest.fixture
def mock_llm() -> MagicMock:
    """Mock LLM port."""
    mock = MagicMock(spec=LLMPort)
    mock.complete.return_value = (
        '{"date": {"full": "2024-03-15"}, "company": {"name": "Acme Corp"},'
        ' "invoice": {"number": "INV-1"}, "description": {"oneline": "Consulting"}}'
    )
    return mock


@pytest.fixture
def mock_storage() -> MagicMock:
    """Mock storage port."""
    mock = MagicMock(spec=StoragePort)
    mock.rename.side_effect = lambda path, filename: Path(path).with_name(filename)
    return mock


@pytest.fixture
def sample_texts() -> dict[str, str]:
    """pdftotext-style samples of each known layout, keyed by family."""
    return SAMPLE_TEXTS
