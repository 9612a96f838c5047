from textmark.config.settings import settings
from textmark.locator.span_locator import (
    MatchMode,
    MatchSpan,
    find_first,
    locate,
    locate_one,
    merge_spans,
    slice_original,
)
from textmark.normalizer.text_normalizer import (
    CodepointSpan,
    NormalizedString,
    TextNormalizer,
    normalize,
    normalize_query,
)
from textmark.snippet.context_window import (
    ContextUnit,
    ContextWindow,
    truncate,
    truncate_words,
    window_around,
)
from textmark.snippet.highlighter import highlight, highlight_word
from textmark.snippet.markup import strip_markup


__all__ = [
    "CodepointSpan",
    "ContextUnit",
    "ContextWindow",
    "MatchMode",
    "MatchSpan",
    "NormalizedString",
    "TextNormalizer",
    "find_first",
    "highlight",
    "highlight_word",
    "locate",
    "locate_one",
    "merge_spans",
    "normalize",
    "normalize_query",
    "settings",
    "slice_original",
    "strip_markup",
    "truncate",
    "truncate_words",
    "window_around",
]
