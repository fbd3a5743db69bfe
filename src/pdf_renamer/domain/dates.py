"""Convert layout dates to ISO form."""

import re
from datetime import datetime

from .errors import DateConversionFailedError

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ISO_FORMATS = ("YYYY-MM-DD", "%Y-%m-%d")


def convert_date(raw: str, date_format: str) -> str:
    """Convert ``raw`` (shaped like ``date_format``) to ``yyyy-mm-dd``.

    Strings already in ISO form pass through untouched.
    """
    raw = raw.strip()
    if not raw:
        raise DateConversionFailedError(raw, date_format)

    if ISO_DATE.match(raw):
        return raw
    if date_format in ISO_FORMATS:
        raise DateConversionFailedError(raw, date_format)

    try:
        return datetime.strptime(raw, date_format).date().isoformat()
    except ValueError as e:
        raise DateConversionFailedError(raw, date_format) from e
