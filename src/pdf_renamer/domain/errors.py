"""Typed failures for the renaming pipeline."""

from typing import Any


class RenamerError(Exception):
    """Base class for per-document pipeline failures."""


class UnrecognizedDocumentError(RenamerError):
    """No rule extractor matched and no model backend is configured."""

    def __init__(self, message: str = "Unable to recognize PDF type") -> None:
        super().__init__(message)


class ExtractionFailedError(RenamerError):
    """Source text is missing, empty, or could not be extracted."""


class DateConversionFailedError(RenamerError):
    """Raw date could not be parsed with its declared format."""

    def __init__(self, raw: str, date_format: str) -> None:
        self.raw = raw
        self.date_format = date_format
        if raw:
            message = f"Failed to convert date {raw!r} with format {date_format!r}"
        else:
            message = "Failed to extract date from PDF"
        super().__init__(message)


class ModelRequestError(RenamerError):
    """Language-model backend could not be reached or returned an error."""

    def __init__(self, message: str, raw_response: str | None = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class MalformedModelResponseError(RenamerError):
    """Model output did not contain a JSON object."""

    def __init__(self, message: str, raw_response: str) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class MissingRequiredFieldError(RenamerError):
    """Normalization could not satisfy a required field."""

    def __init__(self, field: str, record: dict[str, Any]) -> None:
        super().__init__(f"Missing required field in analysis result: {field}")
        self.field = field
        self.record = record


class MissingDateError(MissingRequiredFieldError):
    """Neither a full date nor its parts could be obtained."""

    def __init__(self, record: dict[str, Any]) -> None:
        super().__init__("date", record)
