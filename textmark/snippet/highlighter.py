# textmark/snippet/highlighter.py
# Responsibility: Wrap keyword occurrences in markup without altering the visible text.

import logging
from typing import List, Optional, Sequence, Tuple, Union

from textmark.config.settings import DEFAULT_MODE, DEFAULT_PLACEHOLDER, DEFAULT_TEMPLATE, settings
from textmark.locator.span_locator import MatchMode, locate
from textmark.normalizer.text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)


def split_template(template: Optional[str]) -> Tuple[str, str]:
    """
    Splits a highlight template around its placeholder.

    A template without a placeholder is a configuration mistake; it is logged
    and the configured template is used instead, or the built-in
    '<b>%s</b>' when the configuration is broken too.
    """
    placeholder = settings.HIGHLIGHT.PLACEHOLDER
    if template is None:
        template = settings.HIGHLIGHT.TEMPLATE

    if placeholder and placeholder in template:
        return tuple(template.split(placeholder, 1))

    logger.warning("Highlight template %r has no %r placeholder, using default", template, placeholder)
    configured = settings.HIGHLIGHT.TEMPLATE
    if placeholder and placeholder in configured:
        return tuple(configured.split(placeholder, 1))

    logger.warning("Configured highlight template %r is unusable, using %r", configured, DEFAULT_TEMPLATE)
    prefix, suffix = DEFAULT_TEMPLATE.split(DEFAULT_PLACEHOLDER, 1)
    return prefix, suffix


def resolve_mode(mode: Union[MatchMode, str, None]) -> MatchMode:
    """
    MatchMode for an argument or the configured default; unknown values fall back to STEM.
    """
    try:
        return MatchMode(mode or settings.HIGHLIGHT.MODE)
    except ValueError:
        logger.warning("Unknown match mode %r, using %r", mode, DEFAULT_MODE)
        return MatchMode(DEFAULT_MODE)


def as_needles(needles: Union[str, Sequence[str], None]) -> List[str]:
    """
    A single needle becomes a one-element list; it is never split on whitespace.
    """
    if not needles:
        return []
    if isinstance(needles, str):
        return [needles]
    return [n for n in needles if n]


def highlight(
    text: str,
    needles: Union[str, Sequence[str], None],
    template: Optional[str] = None,
    mode: Union[MatchMode, str, None] = None,
) -> str:
    """
    Wraps every occurrence of the needles in text with template.

    Matching ignores case and accents; the wrapped substring is the original
    one. Overlapping matches of different needles are wrapped once.

    Args:
        text (str): Content to mark up.
        needles (str | Sequence[str]): One or more keywords.
        template (str): Markup containing one '%s' placeholder, default '<b>%s</b>'.
        mode (MatchMode): STEM (word-prefix, default) or EXACT (any substring).

    Returns:
        str: Highlighted text, or text unchanged when nothing matches.
    """
    terms = as_needles(needles)
    if not text or not terms:
        return text

    mode = resolve_mode(mode)
    spans = locate(TextNormalizer.build(text), terms, mode)
    if not spans:
        return text

    prefix, suffix = split_template(template)

    parts: List[str] = []
    cursor = 0
    for span in spans:
        parts.append(text[cursor:span.start])
        parts.append(prefix + text[span.start:span.end] + suffix)
        cursor = span.end
    parts.append(text[cursor:])

    return "".join(parts)


def highlight_word(text: str, needle: str, template: Optional[str] = None) -> str:
    """
    Single-needle form of highlight().
    """
    return highlight(text, [needle], template)
