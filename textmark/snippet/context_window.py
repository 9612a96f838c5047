# textmark/snippet/context_window.py
# Responsibility: Cut a bounded snippet of text around the first keyword match.

import logging
import re
from enum import Enum
from typing import List, Optional, Union

from textmark.config.settings import DEFAULT_UNIT, settings
from textmark.locator.span_locator import MatchMode, MatchSpan, find_first
from textmark.snippet.markup import strip_markup

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"\S+")


class ContextUnit(str, Enum):
    CHARS = "chars"
    WORDS = "words"


def resolve_unit(unit: Union[ContextUnit, str, None]) -> ContextUnit:
    """
    ContextUnit for an argument or the configured default; unknown values fall back to CHARS.
    """
    try:
        return ContextUnit(unit or settings.WINDOW.UNIT)
    except ValueError:
        logger.warning("Unknown context unit %r, using %r", unit, DEFAULT_UNIT)
        return ContextUnit(DEFAULT_UNIT)


def truncate(text: str, length: int, affix: str = "..") -> str:
    """
    Head-truncates text to at most `length` codepoints plus affix.

    If the cut lands inside a word it backs off to the previous whitespace;
    a single word longer than `length` is cut hard.
    """
    if length <= 0 or len(text) <= length:
        return text

    head = text[:length]
    if not text[length].isspace() and not head[-1].isspace():
        parts = head.rsplit(None, 1)
        if len(parts) == 2:
            head = parts[0]

    return head.rstrip() + affix


def truncate_words(text: str, count: int, affix: str = "..") -> str:
    """
    Keeps the first `count` whitespace-separated words of text.
    """
    if count <= 0:
        return text

    words = list(WORD_PATTERN.finditer(text))
    if len(words) <= count:
        return text
    return text[:words[count - 1].end()] + affix


class ContextWindow:
    """
    Extracts the neighbourhood of a keyword from longer content.
    The keyword itself is kept in its original casing and accents.
    """

    @staticmethod
    def around_chars(text: str, span: MatchSpan, context: int, affix: str) -> str:
        """
        Up to `context` codepoints on each side of the match.

        e.g. ("foo abc bar", abc, 2) -> "..o abc b.."
        """
        left = text[:span.start]
        middle = text[span.start:span.end]
        right = text[span.end:]

        before = affix + left[-context:] if len(left) > context else left
        after = right[:context] + affix if len(right) > context else right
        return before + middle + after

    @staticmethod
    def around_words(text: str, span: MatchSpan, context: int, affix: str) -> str:
        """
        Up to `context` whole words on each side of the word(s) holding the match.
        """
        words = list(WORD_PATTERN.finditer(text))
        first = ContextWindow._word_index(words, span.start)
        last = ContextWindow._word_index(words, span.end - 1)

        lo = max(0, first - context)
        hi = min(len(words) - 1, last + context)

        snippet = text[words[lo].start():words[hi].end()]
        if lo > 0:
            snippet = affix + snippet
        if hi < len(words) - 1:
            snippet = snippet + affix
        return snippet

    @staticmethod
    def _word_index(words: List[re.Match], offset: int) -> int:
        # Match spans always start and end on non-space characters
        for index, word in enumerate(words):
            if word.end() > offset:
                return index
        return len(words) - 1


def window_around(
    text: str,
    needle: str,
    context: Optional[int] = None,
    affix: Optional[str] = None,
    unit: Union[ContextUnit, str, None] = None,
    strip_tags: Optional[bool] = None,
) -> str:
    """
    Truncates text around the first (case- and accent-insensitive) occurrence of needle.

    Args:
        text (str): Content to cut.
        needle (str): Keyword to center on.
        context (int): Radius on each side of the match, in `unit`s.
        affix (str): Marker for trimmed sides.
        unit (ContextUnit): CHARS (codepoints) or WORDS (whole words).
        strip_tags (bool): Reduce HTML to text first.

    Returns:
        str: The snippet. If needle is absent, a head truncation to twice the
        radius. Blank needles and non-positive radii return text unchanged.
    """
    context = settings.WINDOW.DEFAULT_CONTEXT if context is None else context
    affix = settings.WINDOW.AFFIX if affix is None else affix
    unit = resolve_unit(unit)
    strip_tags = settings.WINDOW.STRIP_TAGS if strip_tags is None else strip_tags

    if not text or not needle or not needle.strip() or context <= 0:
        return text

    if strip_tags:
        text = strip_markup(text)

    span = find_first(text, needle, MatchMode.EXACT)
    if span is None:
        logger.debug("Needle %r not found, falling back to head truncation", needle)
        if unit is ContextUnit.WORDS:
            return truncate_words(text, context * 2, affix)
        return truncate(text, context * 2, affix)

    if unit is ContextUnit.WORDS:
        return ContextWindow.around_words(text, span, context, affix)
    return ContextWindow.around_chars(text, span, context, affix)
