# textmark/locator/span_locator.py
# Responsibility: Find needle occurrences in normalized text and report them in original coordinates.

import logging
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from textmark.normalizer.text_normalizer import (
    CodepointSpan,
    NormalizedString,
    TextNormalizer,
    normalize_query,
)

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    # Contiguous substring anywhere in the text
    EXACT = "exact"
    # Prefix of a word token ("bedarf" in "bedarfsgerechte")
    STEM = "stem"


@dataclass(frozen=True)
class MatchSpan(CodepointSpan):
    """
    A match in original-string coordinates, tagged with the needle that produced it.
    """
    needle: str = ""


def is_token_boundary(text: str, index: int) -> bool:
    """
    True if a word token may start at text[index].

    A token starts at the beginning of the text or right after whitespace,
    punctuation or a symbol.
    """
    if index == 0:
        return True
    prev = text[index - 1]
    if prev.isspace():
        return True
    return unicodedata.category(prev)[0] in ("P", "S", "Z")


def locate_one(haystack: NormalizedString, needle: str, mode: MatchMode = MatchMode.EXACT) -> List[MatchSpan]:
    """
    All occurrences of a single needle, ascending by start offset.

    Occurrences may overlap; merging is left to locate().

    Args:
        haystack (NormalizedString): The normalized content.
        needle (str): Raw search term; it is normalized here.
        mode (MatchMode): EXACT or STEM matching.

    Returns:
        List[MatchSpan]: Matches in original coordinates, empty if none.
    """
    mode = MatchMode(mode)
    term = normalize_query(needle)
    if not term or not haystack.text:
        return []

    spans: List[MatchSpan] = []
    text = haystack.text
    pos = text.find(term)
    while pos != -1:
        if mode is MatchMode.EXACT or is_token_boundary(text, pos):
            span = haystack.to_original(pos, len(term))
            spans.append(MatchSpan(start=span.start, length=span.length, needle=needle))
        pos = text.find(term, pos + 1)

    return spans


def merge_spans(spans: Iterable[MatchSpan]) -> List[MatchSpan]:
    """
    Collapses overlapping or adjacent spans into their union.

    Sorted by (start, -length) so a longer span subsumes a shorter one with the
    same start; the merged span keeps the needle of the span it grew from.
    """
    ordered = sorted(spans, key=lambda s: (s.start, -s.length))
    merged: List[MatchSpan] = []

    for span in ordered:
        if merged and span.start <= merged[-1].end:
            last = merged[-1]
            end = max(last.end, span.end)
            merged[-1] = MatchSpan(start=last.start, length=end - last.start, needle=last.needle)
        else:
            merged.append(span)

    return merged


def locate(haystack: NormalizedString, needles: Sequence[str], mode: MatchMode = MatchMode.EXACT) -> List[MatchSpan]:
    """
    Locates every needle independently, then merges the results.

    Needles that match nothing are ignored; no match at all is an empty list.

    Args:
        haystack (NormalizedString): The normalized content.
        needles (Sequence[str]): Search terms.
        mode (MatchMode): EXACT or STEM matching.

    Returns:
        List[MatchSpan]: Non-overlapping spans, ascending by start offset.
    """
    mode = MatchMode(mode)
    found: List[MatchSpan] = []
    for needle in needles:
        found.extend(locate_one(haystack, needle, mode))

    merged = merge_spans(found)
    logger.debug("Located %d span(s) for %d needle(s) in %s mode", len(merged), len(needles), mode.value)
    return merged


def find_first(text: str, needle: str, mode: MatchMode = MatchMode.EXACT) -> Optional[MatchSpan]:
    """
    First occurrence of needle in text, or None.
    """
    spans = locate_one(TextNormalizer.build(text), needle, mode)
    return spans[0] if spans else None


def slice_original(text: str, needle: str, mode: MatchMode = MatchMode.EXACT) -> Optional[str]:
    """
    The original-form substring the needle matches first.

    e.g. slice_original("hello féé bar", "fee") -> "féé"
    """
    span = find_first(text, needle, mode)
    if span is None:
        return None
    return text[span.start:span.end]
