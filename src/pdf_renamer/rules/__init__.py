"""Rule-based extractors for known document layouts.

Predicates overlap, so ``EXTRACTORS`` is checked in order and the first match
wins. New layouts go into this tuple at the position that keeps more specific
rules ahead of generic ones.
"""

from collections.abc import Iterable, Iterator, Sequence

from ..domain.models import ExtractorDescriptor
from . import language_tooler, paddle, paddle_remittance, stripe

EXTRACTORS: tuple[ExtractorDescriptor, ...] = (
    paddle_remittance.EXTRACTOR,
    paddle.EXTRACTOR,
    language_tooler.EXTRACTOR,
    stripe.EXTRACTOR,
)

__all__ = ["EXTRACTORS", "describe_extractors", "select_extractor"]


def select_extractor(
    text: str, extractors: Sequence[ExtractorDescriptor] = EXTRACTORS
) -> ExtractorDescriptor | None:
    """Return the first extractor that can handle ``text``, or None."""
    for extractor in extractors:
        if extractor.can_handle(text):
            return extractor
    return None


def describe_extractors(
    extractors: Iterable[ExtractorDescriptor] = EXTRACTORS,
) -> Iterator[tuple[str, str]]:
    for extractor in extractors:
        yield extractor.name, extractor.description
