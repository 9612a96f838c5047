# textmark/snippet/markup.py
# Responsibility: Reduce HTML content to its visible text before cutting snippets.

import re

from bs4 import BeautifulSoup

NOISE_TAGS = ["script", "style", "noscript", "template"]
TAG_PATTERN = re.compile(r"<[A-Za-z!/?][^>]*>")


def has_markup(text: str) -> bool:
    return bool(text) and TAG_PATTERN.search(text) is not None


def strip_markup(text: str) -> str:
    """
    Removes tags (and script/style bodies) from text, keeping the text nodes in order.

    Plain text without anything tag-like is returned as is, so entities and
    stray '<' characters in ordinary prose are untouched.
    """
    if not has_markup(text):
        return text

    soup = BeautifulSoup(text, "html.parser")
    for tag_name in NOISE_TAGS:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    return soup.get_text()
