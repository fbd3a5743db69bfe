"""Repair loosely structured model output into a complete DocumentRecord.

Every step takes a mapping and returns a new one; none of them mutate their
input. ``normalize`` chains the steps and builds the final record.
"""

import copy
import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from .dates import ISO_DATE
from .errors import MalformedModelResponseError, MissingDateError, MissingRequiredFieldError
from .models import (
    DEFAULT_DESCRIPTION,
    UNKNOWN_ISSUER,
    DateInfo,
    Description,
    DocumentNumber,
    DocumentRecord,
    Issuer,
)

logger = logging.getLogger(__name__)

Raw = dict[str, Any]
Step = Callable[[Raw], Raw]

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

# Part keys as the model is asked for them, then the long-form spelling
_DATE_PARTS = (("yyyy", "year"), ("mm", "month"), ("dd", "day"))


def default_record() -> Raw:
    return {
        "date": {"yyyy": "", "mm": "", "dd": "", "full": ""},
        "issuer": {"name": UNKNOWN_ISSUER},
        "documentNumber": {"value": ""},
        "description": {"oneline": DEFAULT_DESCRIPTION},
    }


def parse_model_response(text: str) -> Raw:
    """Parse a model response, unwrapping a fenced code block if present."""
    match = _FENCED_JSON.search(text)
    content = (match.group(1) if match else text).strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON response: {text[:200]}")
        raise MalformedModelResponseError("Invalid JSON response from LLM", text) from e

    if not isinstance(data, dict):
        raise MalformedModelResponseError(
            f"Expected a JSON object from LLM, got {type(data).__name__}", text
        )
    return data


def coerce_root(raw: Any) -> Raw:
    """Replace a non-object response with the default record."""
    if not isinstance(raw, Mapping):
        logger.warning("LLM returned non-object result, using default structure")
        return default_record()
    return copy.deepcopy(dict(raw))


def fold_aliases(raw: Raw) -> Raw:
    """Map ``company``/``invoice`` onto ``issuer``/``documentNumber``."""
    result = dict(raw)

    company = result.pop("company", None)
    if "issuer" not in result and isinstance(company, Mapping):
        result["issuer"] = {"name": company.get("name")}

    invoice = result.pop("invoice", None)
    if "documentNumber" not in result and isinstance(invoice, Mapping):
        result["documentNumber"] = {"value": invoice.get("number")}

    return result


def fold_summary(raw: Raw) -> Raw:
    """Fold a legacy ``summary`` into ``description``.

    A populated description always wins. The summary only fills the gap when
    the description is absent, or present with an empty ``oneline``.
    """
    result = dict(raw)
    summary = result.pop("summary", None)
    if summary is None:
        return result

    if isinstance(summary, Mapping):
        oneline = summary.get("oneline") or DEFAULT_DESCRIPTION
    elif isinstance(summary, str):
        oneline = summary
    else:
        return result

    description = result.get("description")
    if description is None:
        result["description"] = {"oneline": oneline}
    elif isinstance(description, Mapping) and not description.get("oneline"):
        result["description"] = {**description, "oneline": oneline}
    return result


def ensure_sections(raw: Raw) -> Raw:
    """Make sure every section is a mapping, replacing anything else."""
    result = dict(raw)
    for key, default in default_record().items():
        value = result.get(key)
        result[key] = dict(value) if isinstance(value, Mapping) else default
    return result


def _part(date: Mapping[str, Any], short: str, long: str) -> str:
    value = date.get(short) or date.get(long)
    return str(value) if value else ""


def repair_date(raw: Raw) -> Raw:
    """Derive ``full`` from the parts, or the parts from ``full``."""
    result = dict(raw)
    date = dict(result.get("date") or {})

    parts = [_part(date, short, long) for short, long in _DATE_PARTS]
    full = str(date["full"]) if date.get("full") else ""

    if not full and all(parts):
        full = "-".join(parts)
    elif full and not all(parts):
        segments = full.split("-")
        if len(segments) == 3:
            parts = segments

    if full and not ISO_DATE.match(full):
        logger.warning(f"Date {full!r} is not in yyyy-mm-dd form")

    result["date"] = {
        "yyyy": parts[0],
        "mm": parts[1],
        "dd": parts[2],
        "full": full,
    }
    return result


def apply_defaults(raw: Raw) -> Raw:
    """Fill falsy issuer name, description and document number."""
    result = dict(raw)

    issuer = dict(result.get("issuer") or {})
    issuer["name"] = str(issuer.get("name") or "").strip() or UNKNOWN_ISSUER
    result["issuer"] = issuer

    description = dict(result.get("description") or {})
    oneline = str(description.get("oneline") or "").strip()
    description["oneline"] = oneline or DEFAULT_DESCRIPTION
    result["description"] = description

    number = dict(result.get("documentNumber") or {})
    value = number.get("value")
    number["value"] = str(value) if value is not None else ""
    result["documentNumber"] = number

    return result


def check_required(raw: Raw) -> Raw:
    """Raise if ``date`` or ``issuer`` could not be satisfied."""
    date = raw.get("date")
    if not isinstance(date, Mapping) or not date.get("full"):
        raise MissingDateError(raw)
    issuer = raw.get("issuer")
    if not isinstance(issuer, Mapping) or not issuer:
        raise MissingRequiredFieldError("issuer", raw)
    return raw


STEPS: tuple[Step, ...] = (
    fold_aliases,
    fold_summary,
    ensure_sections,
    repair_date,
    apply_defaults,
    check_required,
)


def repair(raw: Any) -> Raw:
    """Run every repair step and return the completed mapping."""
    result = coerce_root(raw)
    for step in STEPS:
        result = step(result)
    return result


def normalize(raw: Any) -> DocumentRecord:
    """Turn arbitrary model output into a DocumentRecord.

    Raises MissingRequiredFieldError (MissingDateError for the date) carrying
    the partially repaired record.
    """
    data = repair(raw)
    date = data["date"]
    return DocumentRecord(
        date=DateInfo(yyyy=date["yyyy"], mm=date["mm"], dd=date["dd"], full=date["full"]),
        issuer=Issuer(name=data["issuer"]["name"]),
        document_number=DocumentNumber(value=data["documentNumber"]["value"]),
        description=Description(oneline=data["description"]["oneline"]),
    )
